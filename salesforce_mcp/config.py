"""
Configuration management for Salesforce MCP Server
Supports environment variables and .env files
"""
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SalesforceConfig(BaseSettings):
    """Salesforce MCP Server configuration

    Every field can be set through a ``SALESFORCE_`` prefixed environment
    variable, e.g. ``SALESFORCE_USERNAME`` or ``SALESFORCE_TOKEN``.
    """

    # Server Configuration
    mcp_server_name: str = Field(default="salesforce-mcp-server", description="MCP server name")
    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_json: bool = Field(default=False, description="Emit logs as JSON lines")

    # Login Configuration
    instance_url: str = Field(
        default="https://login.salesforce.com",
        description="Login URL (login, test or My Domain URL)"
    )
    username: Optional[str] = Field(default=None, description="Salesforce username")
    password: Optional[str] = Field(default=None, description="Salesforce password")
    token: Optional[str] = Field(default=None, description="Security token appended to the password")
    consumer_key: Optional[str] = Field(default=None, description="Connected app consumer key (OAuth login)")
    consumer_secret: Optional[str] = Field(default=None, description="Connected app consumer secret (OAuth login)")

    # API Configuration
    api_version: str = Field(default="59.0", description="Salesforce API version")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="SALESFORCE_",
        extra="ignore",
    )

    @property
    def uses_oauth(self) -> bool:
        return bool(self.consumer_key and self.consumer_secret)


# Global configuration instance
_config: Optional[SalesforceConfig] = None


def get_config() -> SalesforceConfig:
    """Get global configuration instance (singleton pattern)"""
    global _config
    if _config is None:
        _config = SalesforceConfig()
    return _config


def reload_config() -> SalesforceConfig:
    """Reload configuration from environment/file"""
    global _config
    _config = SalesforceConfig()
    return _config
