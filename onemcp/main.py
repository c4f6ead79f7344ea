import asyncio
import logging
import sys

from fastmcp import FastMCP

from .api_client import ApiClient
from .config import Config, load_features
from .logging_config import setup_logging
from .preconditions import ServiceEnablementGate
from .registrar import ToolRegistrar
from .registry import build_server_registry


async def main():
    """
    The main entry point for the onemcp server.

    Builds the server registry, registers the remote tools on a FastMCP server
    and runs it in stdio mode (--stdio) or Streamable HTTP mode.
    """
    stdio_mode = "--stdio" in sys.argv
    setup_logging(stdio_mode=stdio_mode)
    logging.info("Starting onemcp...")

    api_client = ApiClient(access_token=Config.get_access_token())
    try:
        gate = ServiceEnablementGate(api_client)
        registry = build_server_registry(load_features(), api_client, gate)
        registrar = ToolRegistrar(registry, has_credentials=api_client.has_credentials)

        server = FastMCP("onemcp")
        await registrar.register_tools(server)

        if stdio_mode:
            logging.info("Running in stdio mode.")
            await server.run_async(transport="stdio")
        else:
            logging.info(f"Running in Streamable HTTP mode on {Config.HOST}:{Config.PORT}")
            await server.run_async(
                transport="streamable-http", host=Config.HOST, port=Config.PORT
            )
    finally:
        await api_client.close()


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logging.info("Shutting down onemcp.")


if __name__ == "__main__":
    run()
