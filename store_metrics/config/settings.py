"""
Proje ayarları ve sabit değerler.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ── Dizinler ──────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = Path(os.getenv("STORE_METRICS_DATA_DIR", str(PROJECT_ROOT / "data")))
WOOCOMMERCE_DATA_DIR = DATA_DIR / "woocommerce"
STORE_FILE = DATA_DIR / "store_metrics.json"
REPORTS_DIR = PROJECT_ROOT / "reports"

# ── WooCommerce REST API ──────────────────────────────────
WOOCOMMERCE_URL = os.getenv("WOOCOMMERCE_URL", "")
WOOCOMMERCE_CONSUMER_KEY = os.getenv("WOOCOMMERCE_CONSUMER_KEY", "")
WOOCOMMERCE_CONSUMER_SECRET = os.getenv("WOOCOMMERCE_CONSUMER_SECRET", "")
WOOCOMMERCE_TIMEOUT = int(os.getenv("WOOCOMMERCE_TIMEOUT", "30"))
WOOCOMMERCE_PER_PAGE = 100

# ── Kayıt Anahtarları ─────────────────────────────────────
COST_PRICE_META_KEY = "_store_metrics_new_cost_price"
PR_BUDGET_OPTION = "store_metrics_new_pr_budget"
ADDITIONAL_COSTS_OPTION = "store_metrics_new_additional_costs"
MONTHLY_OPTION_SUFFIX = "_monthly"

# ── Yönetim Paneli ────────────────────────────────────────
REQUIRED_CAPABILITY = "manage_woocommerce"
DASHBOARD_CAPABILITIES = [
    c.strip()
    for c in os.getenv("STORE_METRICS_CAPABILITIES", REQUIRED_CAPABILITY).split(",")
    if c.strip()
]
SECRET_KEY = os.getenv("STORE_METRICS_SECRET_KEY", "change-me")
REFRESH_ACTION = "store_metrics_refresh_action"
NONCE_MAX_AGE = int(os.getenv("STORE_METRICS_NONCE_MAX_AGE", str(24 * 60 * 60)))

TOP_PRODUCTS_LIMIT = 5
YEARS_BACK = 5

# ── Para Birimleri ────────────────────────────────────────
CURRENCIES = {
    "USD": "$",
    "EUR": "€",
    "TRY": "₺",
    "GBP": "£",
    "ILS": "₪",
}

DEFAULT_CURRENCY = os.getenv("CURRENCY", "USD")

# ── Log ───────────────────────────────────────────────────
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# ── Rapor Ayarları ────────────────────────────────────────
REPORT_DATE_FORMAT = "%d.%m.%Y"
