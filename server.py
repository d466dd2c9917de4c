"""
MCP Server for unit-aware fluid mechanics calculations.

This server provides a calculator for common fluid mechanics problems (flow rate,
pressure, density, water column, Reynolds number, friction factor, head loss, pump head
and power, NPSH, Bernoulli and unit conversion) together with a bounded, persisted
history of recorded calculations.
"""

import logging
import os

from mcp.server.fastmcp import FastMCP

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger("fluidcalc-mcp")

# Initialize the MCP server
mcp = FastMCP("fluid-calculator")

# Import omnitools
from omnitools.calculator import fluid_calculator
from omnitools.catalog import calculator_catalog
from omnitools.history import calculation_history
from omnitools.parameter_sweep import parameter_sweep

# Register omnitools with MCP
mcp.tool()(fluid_calculator)
mcp.tool()(calculator_catalog)
mcp.tool()(calculation_history)
mcp.tool()(parameter_sweep)

from history import JsonFileBlobStore, configure_default_store
from utils.constants import DEFAULT_HISTORY_FILE, HISTORY_FILE_ENV


def configure_history() -> str:
    """Point the process-wide history at the JSON file named by the environment."""
    path = os.environ.get(HISTORY_FILE_ENV) or DEFAULT_HISTORY_FILE
    store = configure_default_store(JsonFileBlobStore(path))
    logger.info(f"History file: {store.blob_store.path} ({len(store)} entries)")
    return path


def main():
    logger.info("Starting fluid calculator MCP server...")
    configure_history()

    logger.info("Registered omnitools:")
    logger.info("  - fluid_calculator: Evaluate a calculation category, optionally recording it")
    logger.info("  - calculator_catalog: Categories, input fields, units and formulas")
    logger.info("  - calculation_history: List, remove or clear recorded calculations")
    logger.info("  - parameter_sweep: Sweep one input of a category over a range")

    # Start the server
    mcp.run()


if __name__ == "__main__":
    main()
