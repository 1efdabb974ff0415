import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# ==================== APP CONFIGURATION ====================
APP_TITLE = "CBMS Marriage Fund"
APP_ICON = "💍"
LAYOUT = "wide"

# ==================== API CONFIGURATION ====================
# Base URL of the REST backend, e.g. http://127.0.0.1:8000/api
API_BASE_URL = os.getenv("CBMS_API_URL", "http://127.0.0.1:8000/api").rstrip("/")
# Media files are served from the backend root, not from /api
BACKEND_BASE_URL = API_BASE_URL[:-len("/api")] if API_BASE_URL.endswith("/api") else API_BASE_URL
REQUEST_TIMEOUT_SECONDS = float(os.getenv("CBMS_REQUEST_TIMEOUT", "30"))

# ==================== REQUEST CACHE ====================
QUERY_STALE_SECONDS = 5 * 60  # 5 minutes

# ==================== FUND CONFIGURATION ====================
DEFAULT_MEMBER_TARGET = 5000  # Fallback when the backend has no system target yet
DEFAULT_MAX_REQUEST_AMOUNT = 120000
APPROVAL_DEFAULT_DAYS = 45
RECENT_REQUESTS_LIMIT = 5
TOP_TEAMS_LIMIT = 3
CONTRIBUTION_AMOUNT = 5000

# ==================== LOGGING ====================
LOG_DIR = os.getenv("CBMS_LOG_DIR", "logs")
LOG_LEVEL = os.getenv("CBMS_LOG_LEVEL", "INFO")

# ==================== TERMS OF USE ====================
TERMS_ACK_KEY = "cbms-terms-acknowledged"
TERMS_ALL_ACK_KEY = "cbms-all-acknowledgements"

# ==================== IMAGE SETTINGS ====================
SUPPORTED_IMAGE_FORMATS = ["png", "jpg", "jpeg", "webp"]
MAX_IMAGE_SIZE_MB = 10

# ==================== CROPPING SETTINGS ====================
CROP_BOX_COLOR = "#0066CC"  # Blue color for crop box
CROP_REALTIME_UPDATE = True
CROP_OUTPUT_FILENAME = "profile_cropped.jpg"
CROP_JPEG_QUALITY = 95
CROP_MIN_ZOOM = 1.0
CROP_MAX_ZOOM = 3.0
CROP_ZOOM_STEP = 0.1
