"""Salesforce connection management

A new session is opened for every tool call; nothing is cached between calls.
"""
import logging
from typing import Optional
from urllib.parse import urlparse

from simple_salesforce import Salesforce

from salesforce_mcp.config import SalesforceConfig, get_config
from salesforce_mcp.errors import ConnectionConfigError
from salesforce_mcp.services.capability import SimpleSalesforceCapability

logger = logging.getLogger(__name__)


def login_domain(instance_url: str) -> str:
    """
    Translate a login/instance URL into simple_salesforce's ``domain``.

    Examples:
        https://login.salesforce.com      -> "login"
        https://test.salesforce.com       -> "test"
        https://acme.my.salesforce.com    -> "acme.my"
    """
    host = urlparse(instance_url).netloc or urlparse(f"https://{instance_url}").netloc
    host = host.split(":", 1)[0]
    if host.endswith(".salesforce.com"):
        return host[: -len(".salesforce.com")]
    return host or "login"


def get_salesforce_connection(config: Optional[SalesforceConfig] = None) -> SimpleSalesforceCapability:
    """
    Log in to Salesforce with the configured credentials.

    Username/password/security token is the default; when a consumer key and
    secret are configured the OAuth username-password flow is used instead.

    Returns:
        SalesforceCapability for one tool call

    Raises:
        ConnectionConfigError: If username or password is not configured
    """
    config = config or get_config()

    if not config.username or not config.password:
        raise ConnectionConfigError(
            "Salesforce credentials are not configured. "
            "Set SALESFORCE_USERNAME, SALESFORCE_PASSWORD and SALESFORCE_TOKEN."
        )

    domain = login_domain(config.instance_url)
    logger.info("Creating Salesforce connection (domain=%s, oauth=%s)", domain, config.uses_oauth)

    if config.uses_oauth:
        sf = Salesforce(
            username=config.username,
            password=config.password + (config.token or ""),
            consumer_key=config.consumer_key,
            consumer_secret=config.consumer_secret,
            domain=domain,
            version=config.api_version,
        )
    else:
        sf = Salesforce(
            username=config.username,
            password=config.password,
            security_token=config.token or "",
            domain=domain,
            version=config.api_version,
        )

    logger.info("Connected to %s", sf.sf_instance)
    return SimpleSalesforceCapability(sf)
