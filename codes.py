"""
codes.py — справочник стран турнира: имя → двухбуквенный код флага.

Поиск строгий (регистр и диакритика важны), поэтому варианты написания
одной страны заведены отдельными ключами. Неизвестное имя → "XX".
"""

from __future__ import annotations

from typing import Optional

UNKNOWN_CODE = "XX"
FLAG_URL_TEMPLATE = "https://flagsapi.com/{code}/flat/64.png"

COUNTRY_CODES: dict[str, str] = {
    "Morocco": "MA",
    "Senegal": "SN",
    "Egypt": "EG",
    "Algeria": "DZ",
    "Nigeria": "NG",
    "Mali": "ML",
    "Ivory Coast": "CI",
    "Côte d'Ivoire": "CI",
    "Cote d'Ivoire": "CI",
    "Cameroon": "CM",
    "Tunisia": "TN",
    "South Africa": "ZA",
    "Burkina Faso": "BF",
    "Ghana": "GH",
    "DR Congo": "CD",
    "Democratic Republic of the Congo": "CD",
    "Guinea": "GN",
    "Cape Verde": "CV",
    "Cabo Verde": "CV",
    "Angola": "AO",
    "Zambia": "ZM",
    "Equatorial Guinea": "GQ",
    "Mauritania": "MR",
    "Gambia": "GM",
    "The Gambia": "GM",
    "Mozambique": "MZ",
    "Namibia": "NA",
    "Tanzania": "TZ",
    "Guinea-Bissau": "GW",
    "Gabon": "GA",
    "Zimbabwe": "ZW",
    "Uganda": "UG",
    "Benin": "BJ",
    "Sudan": "SD",
    "Comoros": "KM",
    "Togo": "TG",
    "Libya": "LY",
    "Rwanda": "RW",
    "Congo": "CG",
    "Sierra Leone": "SL",
    "Ethiopia": "ET",
    "Madagascar": "MG",
    "Botswana": "BW",
    "Kenya": "KE",
    "Malawi": "MW",
    "Niger": "NE",
    "Central African Republic": "CF",
    "Liberia": "LR",
    "Burundi": "BI",
}


def resolve_code(name: Optional[str]) -> str:
    """Код страны по точному имени, иначе UNKNOWN_CODE. Никогда не падает."""
    if not name:
        return UNKNOWN_CODE
    return COUNTRY_CODES.get(name, UNKNOWN_CODE)


def flag_url(code: str) -> str:
    return FLAG_URL_TEMPLATE.format(code=code)


def flag_image(name: Optional[str], placeholder: bool = False) -> str:
    """
    Ссылка на флаг для имени команды.

    Для неизвестной страны:
      placeholder=False -> "" (карточки матчей)
      placeholder=True  -> шаблон с "XX" (таблицы групп)
    """
    code = resolve_code(name)
    if code == UNKNOWN_CODE and not placeholder:
        return ""
    return flag_url(code)
