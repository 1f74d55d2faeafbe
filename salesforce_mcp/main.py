# salesforce_mcp/main.py
import sys
import logging

import anyio

from salesforce_mcp.config import get_config
from salesforce_mcp.utils.logging import setup_structured_logging

logger = logging.getLogger(__name__)


def check_connection() -> int:
    """Log in and run a trivial query to confirm credentials and API access."""
    from salesforce_mcp.services.salesforce import get_salesforce_connection

    config = get_config()
    logger.info("Testing Salesforce connection...")
    try:
        sf = get_salesforce_connection(config)
        logger.info("Connected to %s", sf.instance_url)
        logger.info("Auth method: %s", "OAuth2" if config.uses_oauth else "Username/Password")

        result = sf.query("SELECT Id, Name FROM Account LIMIT 1")
        logger.info("Found %s account(s)", result.get("totalSize", 0))
        for record in result.get("records", [])[:1]:
            logger.info("Sample account: %s (%s)", record.get("Name"), record.get("Id"))
    except Exception as e:
        logger.error("Connection test failed: %s", e)
        return 1
    return 0


def main() -> int:
    config = get_config()
    setup_structured_logging(level=config.log_level, use_json=config.log_json)

    if "--check-connection" in sys.argv:
        return check_connection()

    from salesforce_mcp.mcp.catalog import tool_registry
    from salesforce_mcp.mcp.server import create_server, run_stdio

    mcp_server = create_server()
    logging.info("MCP starting (stdio)")
    logging.info("Tools: %s", ", ".join(tool_registry.keys()) or "(none)")
    anyio.run(run_stdio, mcp_server)
    return 0


if __name__ == "__main__":
    sys.exit(main())
