"""Data validators for PJ Regime Analyzer."""

import re


def format_cnpj(cnpj: str) -> str:
    """Format CNPJ as XX.XXX.XXX/XXXX-XX."""
    cnpj = re.sub(r"\D", "", cnpj)
    if len(cnpj) != 14:
        return cnpj
    return f"{cnpj[:2]}.{cnpj[2:5]}.{cnpj[5:8]}/{cnpj[8:12]}-{cnpj[12:]}"


def format_cnae(cnae: str) -> str:
    """Format CNAE subclass as XXXX-X/XX."""
    cnae = re.sub(r"\D", "", cnae)
    if len(cnae) != 7:
        return cnae
    return f"{cnae[:4]}-{cnae[4]}/{cnae[5:]}"


def validar_cnpj(cnpj: str) -> tuple[bool, str]:
    """Validate CNPJ and return reason if invalid.

    Uses módulo 11 algorithm for check digit calculation.

    Multipliers:
    - 1st digit: 5,4,3,2,9,8,7,6,5,4,3,2 (positions 0-11)
    - 2nd digit: 6,5,4,3,2,9,8,7,6,5,4,3,2 (positions 0-12)

    Args:
        cnpj: CNPJ string (can contain formatting characters)

    Returns:
        (True, "") if valid
        (False, "reason") if invalid
    """
    cnpj = re.sub(r"\D", "", cnpj)

    if len(cnpj) != 14:
        return False, f"CNPJ deve ter 14 dígitos, tem {len(cnpj)}"

    if cnpj == cnpj[0] * 14:
        return False, "CNPJ com todos dígitos iguais é inválido"

    mult1 = [5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]
    soma = sum(int(cnpj[i]) * mult1[i] for i in range(12))
    resto = soma % 11
    digito1 = 0 if resto < 2 else 11 - resto

    if int(cnpj[12]) != digito1:
        return False, f"Primeiro dígito verificador inválido (esperado {digito1})"

    mult2 = [6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]
    soma = sum(int(cnpj[i]) * mult2[i] for i in range(13))
    resto = soma % 11
    digito2 = 0 if resto < 2 else 11 - resto

    if int(cnpj[13]) != digito2:
        return False, f"Segundo dígito verificador inválido (esperado {digito2})"

    return True, ""


def validar_cnae(cnae: str) -> tuple[bool, str]:
    """Validate a CNAE subclass code (exactly 7 digits, no formatting).

    Returns:
        (True, "") if valid
        (False, "reason") if invalid
    """
    if not re.fullmatch(r"\d{7}", cnae or ""):
        return False, "CNAE deve conter exatamente 7 dígitos numéricos"
    return True, ""
