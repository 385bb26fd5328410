import os

from dotenv import load_dotenv

# Load environment variables from a local .env file, if present
load_dotenv()


class Settings:
    MONGODB_URI = os.getenv("MONGODB_URI")
    MONGODB_DB = os.getenv("MONGODB_DB", "feedback_collector")
    FEEDBACK_COLLECTION = os.getenv("FEEDBACK_COLLECTION", "feedbacks")
    MONGODB_TIMEOUT_MS = int(os.getenv("MONGODB_TIMEOUT_MS", "5000"))

    CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    API_TITLE = "Feedback Collector"
    API_DESCRIPTION = "A simple feedback collection application"
    API_VERSION = "1.0.0"

settings = Settings()
