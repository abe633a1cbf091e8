"""
Proje ayarları ve sabit değerler.

Ortam değişkenleri proje kökündeki .env dosyasından yüklenir (varsa).
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# ── Dizinler ──────────────────────────────────────────────
PACKAGE_ROOT = Path(__file__).resolve().parent.parent
PROJECT_ROOT = PACKAGE_ROOT.parent

load_dotenv(PROJECT_ROOT / ".env", override=False)

DATA_DIR = Path(os.environ.get("CATALOG_DATA_DIR", PROJECT_ROOT / "data"))
PRODUCTS_FILE = DATA_DIR / "products.json"
REPORTS_DIR = PROJECT_ROOT / "reports"

# ── Katalog Kuralları ─────────────────────────────────────
DEFAULT_CATEGORY = "Others"
LOW_STOCK_THRESHOLD = 10       # stok < 10 → düşük stok
TOP_SELLING_LIMIT = 5
LOW_STOCK_LIMIT = 5
TREND_DAYS = 30
TREND_SHORT_DAYS = 7

MONTH_NAMES = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

# ── Kimlik Doğrulama ──────────────────────────────────────
JWT_SECRET = os.environ.get("JWT_SECRET", "your-secret-key-change-this")
JWT_ALGORITHM = "HS256"
TOKEN_TTL_DAYS = 7

ADMIN_CREDENTIALS = [
    {"email": "admin@xyz.com", "password": "passforadmin"},
    {"email": "admin2@xyz.com", "password": "passforadmin"},
]

# ── AI Danışman ───────────────────────────────────────────
OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY") or os.environ.get("OPENAI_KEY")
ADVICE_MODEL = os.environ.get("ADVICE_MODEL", "gpt-4o-mini")
OPENROUTER_MODEL = "openai/gpt-4o-mini"
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
ADVICE_MAX_TOKENS = 220
ADVICE_TEMPERATURE = 1.05

# ── Para Birimi / Rapor ───────────────────────────────────
CURRENCY_SYMBOL = "₹"
REPORT_DATE_FORMAT = "%d.%m.%Y"
