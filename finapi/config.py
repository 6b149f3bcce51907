"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings


class FinAPIConfig(BaseSettings):
    """FinAPI configuration"""
    
    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 3333
    cors_enabled: bool = True
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    
    # Simulation
    simulate_default_name: str = "Cliente Demo"
    
    class Config:
        env_prefix = "FINAPI_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = FinAPIConfig()


def get_config() -> FinAPIConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> FinAPIConfig:
    """Reload configuration from environment"""
    global config
    config = FinAPIConfig()
    return config
