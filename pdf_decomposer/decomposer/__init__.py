from pdf_decomposer.decomposer.base import BaseDecomposer
from pdf_decomposer.decomposer.exceptions import DecomposerError, EncryptedError, InvalidDataError
from pdf_decomposer.decomposer.models import InputData, Screenshot, TextData
from pdf_decomposer.decomposer.password import FixedPassword, PasswordPolicy, PasswordResolver
from pdf_decomposer.decomposer.pdf_decomposer import PdfDecomposer, build_pdf_decomposer

__all__ = [
    "BaseDecomposer",
    "DecomposerError",
    "EncryptedError",
    "FixedPassword",
    "InputData",
    "InvalidDataError",
    "PasswordPolicy",
    "PasswordResolver",
    "PdfDecomposer",
    "Screenshot",
    "TextData",
    "build_pdf_decomposer",
]
