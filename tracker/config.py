import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.dirname(os.path.dirname(__file__))

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    "sqlite:///" + os.path.join(BASE_DIR, "tracker.db"),
)

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))

# base URL used by the console client when it talks to the HTTP API
API_BASE_URL = os.getenv("API_BASE_URL", f"http://{HOST}:{PORT}")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DATE_FORMAT = "%Y-%m-%d"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
TIME_FORMAT = "%H:%M"

DEFAULT_ROLE = "user"

# ids are stored in signed 64-bit INTEGER columns
MAX_ID = 2 ** 63 - 1
