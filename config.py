import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()

class Config:
    # App settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-key-change-in-production')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Session cookie (JWT stored in an HTTP-only cookie)
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'jwt-secret-change-in-production')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.getenv('SESSION_HOURS', '24')))
    JWT_TOKEN_LOCATION = ['cookies']
    JWT_COOKIE_SECURE = False  # Set to True in production with HTTPS
    JWT_COOKIE_CSRF_PROTECT = True
    JWT_COOKIE_SAMESITE = 'Lax'

    # AI insights
    INSIGHT_BACKEND = os.getenv('INSIGHT_BACKEND', 'huggingface')
    INSIGHT_TIMEOUT = float(os.getenv('INSIGHT_TIMEOUT', '30'))

    # OpenAI
    OPENAI_API_KEY = os.getenv('OPENAI_API_KEY')
    OPENAI_MODEL = os.getenv('OPENAI_MODEL', 'gpt-4o')

    # Hugging Face
    HUGGINGFACE_API_KEY = os.getenv('HUGGINGFACE_API_KEY')
    HUGGINGFACE_API_URL = os.getenv(
        'HUGGINGFACE_API_URL', 'https://router.huggingface.co/hf-inference/models'
    )
    HUGGINGFACE_EMOTION_MODEL = os.getenv('HUGGINGFACE_EMOTION_MODEL', 'SamLowe/roberta-base-go_emotions')
    HUGGINGFACE_SUMMARY_MODEL = os.getenv('HUGGINGFACE_SUMMARY_MODEL', 'facebook/bart-large-cnn')
    HUGGINGFACE_GENERATION_MODEL = os.getenv('HUGGINGFACE_GENERATION_MODEL', 'gpt2')

class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')
    JWT_COOKIE_CSRF_PROTECT = False

class TestingConfig(Config):
    TESTING = True
    JWT_SECRET_KEY = 'testing-jwt-secret-key-that-is-long-enough'
    JWT_COOKIE_CSRF_PROTECT = False

class ProductionConfig(Config):
    JWT_COOKIE_SECURE = True

# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
