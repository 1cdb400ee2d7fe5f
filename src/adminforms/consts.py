"""Constants for adminforms"""

# ==================== File Paths ====================
LOG_FILE_DEFAULT = "data/adminforms.log"
TOML_STORE_PATH_DEFAULT = "data/options.toml"
DATABASE_PATH = "data/options.db"

# ==================== Checkbox Sentinels ====================
CHECKBOX_ON = "on"
CHECKBOX_OFF = "off"

# ==================== Render Defaults ====================
SIZE_DEFAULT = "regular"
RICHTEXT_WIDTH_DEFAULT = "500px"
RICHTEXT_ROWS = 10
TEXTAREA_ROWS = 5
TEXTAREA_COLS = 55
ORDER_SEPARATOR = ","

# ==================== Template Names ====================
TEMPLATE_FIELD_DIR = "fields"
TEMPLATE_FORMS = "forms.html"
TEMPLATE_PAGE = "page.html"
TEMPLATE_NAVIGATION = "navigation.html"
TEMPLATE_SECTIONS = "sections.html"
TEMPLATE_SCRIPT = "script.js"

# ==================== Hook Names ====================
HOOK_FORM_TOP = "form_top_{section}"
HOOK_FORM_BOTTOM = "form_bottom_{section}"

# ==================== Web ====================
OPTIONS_ENDPOINT = "/options"
OPTION_PAGE_FIELD = "option_page"

# ==================== Database Configuration ====================
DB_MAX_CONNECTIONS = 8
DB_STALE_TIMEOUT = 300  # 5 minutes
DB_PRAGMAS = {
    "journal_mode": "wal",
    "synchronous": "NORMAL",
    "busy_timeout": 5000,
    "foreign_keys": 1,
}
