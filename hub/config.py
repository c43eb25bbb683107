import os


def _optional_int(name: str):
    value = os.getenv(name)
    return int(value) if value not in (None, '') else None


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-prod')
    
    # Shared admin secret, compared by exact match
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD', 'Blob')
    
    TOURNAMENT_ID = os.getenv('TOURNAMENT_ID', 'default')
    
    # Redis event log; empty disables publishing
    REDIS_URL = os.getenv('REDIS_URL', '')
    
    # Seed for group randomization (None = system entropy)
    RANDOM_SEED = _optional_int('RANDOM_SEED')
    
    # Server
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '3000'))
    
    # Socket.IO
    SOCKETIO_ASYNC_MODE = os.getenv('SOCKETIO_ASYNC_MODE', 'threading')
    CORS_ALLOWED_ORIGINS = os.getenv('CORS_ALLOWED_ORIGINS', '*')


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False
    REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379')


class TestingConfig(Config):
    TESTING = True
    DEBUG = False
    ADMIN_PASSWORD = 'test-secret'
    REDIS_URL = ''
    RANDOM_SEED = 1234


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
