"""Static catalog of known assets: display name and type per symbol."""

from dataclasses import dataclass

from tomanfolio.constants import AssetType


@dataclass(frozen=True)
class AssetDetail:
    name: str
    type: str


_GOLD_ASSETS = {
    "GOLD18": "طلای ۱۸ عیار",
    "18AYAR": "طلای ۱۸ عیار (آلان‌چند)",
    "ABSHODEH": "آبشده (مثقال طلا)",
    "SEKKEH": "سکه امامی (طرح جدید)",
    "BAHAR": "سکه بهار آزادی",
    "NIM": "نیم سکه",
    "ROB": "ربع سکه",
    "SEK": "سکه گرمی",
    "USD_XAU": "انس طلا (دلار)",
    "XAG": "انس نقره (دلار)",
}

_FIAT_ASSETS = {
    "USD": "دلار آمریکا",
    "EUR": "یورو",
    "AED": "درهم",
    "TRY": "لیر ترکیه",
    "GBP": "پوند انگلیس",
    "CNY": "یوان چین",
    "CAD": "دلار کانادا",
    "AUD": "دلار استرالیا",
    "RUB": "روبل روسیه",
    "IQD": "صد دینار عراق",
    "MYR": "رینگیت مالزی",
    "GEL": "لاری گرجستان",
    "AZN": "منات آذربایجان",
    "AMD": "صد درام ارمنستان",
    "THB": "بات تایلند",
    "OMR": "ریال عمان",
    "INR": "روپیه هند",
    "PKR": "روپیه پاکستان",
    "JPY": "صد ین ژاپن",
    "SAR": "ریال عربستان",
    "AFN": "افغانی",
    "SEK": "کرون سوئد",
    "CHF": "فرانک سوئیس",
    "QAR": "ریال قطر",
    "KRW": "صد وون کره جنوبی",
    "NOK": "کرون نروژ",
    "NZD": "دلار نیوزلند",
    "SGD": "دلار سنگاپور",
    "HKD": "دلار هنگ کنگ",
    "KWD": "دینار کویت",
    "DKK": "کرون دانمارک",
    "BHD": "دینار بحرین",
    "TJS": "سامانی تاجیکستان",
    "TMT": "منات ترکمنستان",
    "KGS": "سوم قرقیزستان",
    "SYP": "صد پوند سوریه",
    "BRL": "رئال برزیل",
    "ARS": "پزو آرژانتین",
    "USD-HAV": "حواله دلار آمریکا",
    "USD-IST": "دلار استانبول",
    "USD-SULAYMANIYAH": "دلار سلیمانیه",
    "USD-HERAT": "دلار هرات",
    "EUR-HAV": "حواله یورو",
    "EUR-IST": "یورو استانبول",
}

_CRYPTO_ASSETS = {
    "USDT": "تتر",
    "BTC": "بیت کوین",
    "ETH": "اتریوم",
    "ETC": "اتریوم کلاسیک",
    "XRP": "ریپل",
    "BNB": "بایننس کوین",
    "SHIB": "شیبا",
    "ADA": "کاردانو",
    "DOGE": "دوج‌کوین",
    "TON": "تون کوین",
    "NOT": "نات کوین",
    "SOL": "سولانا",
    "TRX": "ترون",
    "CAKE": "پنکیک سواپ",
    "AVAX": "آوالانچ",
    "DOT": "پولکادات",
    "LINK": "چین‌لینک",
    "LTC": "لایت‌کوین",
    "PEPE": "پپه",
    "UNI": "یونی‌سواپ",
    "XLM": "استلار",
    "FIL": "فایل‌کوین",
    "NEAR": "نیر پروتکل",
    "EOS": "ایاس",
    "AAVE": "آوه",
    "GRT": "گراف",
    "XTZ": "تزوس",
    "FLOW": "فلو",
    "SAND": "سندباکس",
    "MANA": "دی‌سنترالند",
    "AXS": "اکسی اینفینیتی",
    "CHZ": "چیلیز",
    "ENJ": "انجین کوین",
    "ZEC": "زدکش",
    "GALA": "گالا",
    "LRC": "لوپرینگ",
    "BAT": "بت",
    "ONE": "هارمونی",
    "ZEN": "هورایزن",
    "CVC": "سیویک",
    "STORJ": "استورج",
}


def _build_catalog() -> dict[str, AssetDetail]:
    # Later groups win on symbol clashes (SEK is both a coin and a currency)
    catalog: dict[str, AssetDetail] = {}
    for assets, asset_type in (
        (_GOLD_ASSETS, AssetType.GOLD),
        (_FIAT_ASSETS, AssetType.FIAT),
        (_CRYPTO_ASSETS, AssetType.CRYPTO),
    ):
        for symbol, name in assets.items():
            catalog[symbol] = AssetDetail(name=name, type=asset_type)
    return catalog


ASSET_DETAILS: dict[str, AssetDetail] = _build_catalog()


def get_asset_detail(symbol: str) -> AssetDetail:
    """Name and type for a symbol; unknown symbols are treated as crypto."""
    return ASSET_DETAILS.get(symbol) or AssetDetail(name=symbol, type=AssetType.CRYPTO)
