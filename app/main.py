"""
FastAPI application entry point.
"""
from dotenv import load_dotenv
from app.core.application import create_application
from app.core.config import get_settings
from logging_config import setup_logger

# Load environment variables
load_dotenv()

# Fails fast when OPENAI_API_KEY is missing
settings = get_settings()

setup_logger(
    log_level=settings.LOG_LEVEL,
    log_file=settings.LOG_FILE,
    json_format=settings.LOG_JSON,
)

app = create_application(settings)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
