# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""MCP Server Protocol Layer for check dependency resolution.

This module contains ZERO business logic. Resolution is delegated to
DependencyResolver; this layer only translates MCP tool calls and formats
results.
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import Context, FastMCP
from mcp.server.session import ServerSession

from check_deps.config import CONFIG_FILENAME, Config
from check_deps.errors import DependencyResolutionError
from check_deps.resolver import DependencyResolver
from check_deps.storage import SourceReader

logger = logging.getLogger(__name__)


class CheckDepsMCPServer:
    """MCP Protocol Layer for check dependency resolution.

    Responsibilities:
    - Initialize MCP server and register tools
    - Translate MCP requests to resolver calls
    - Format resolution results and structured errors as tool results
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        reader: Optional[SourceReader] = None,
    ):
        """Initialize MCP server.

        Args:
            config: Configuration object. If None, loads from default location.
            reader: Storage backend passed to every resolver. Defaults to the file system.
        """
        if config is None:
            config = Config()
        self.config = config
        self.reader = reader

        self.mcp = FastMCP(name="check-deps")
        self._register_tools()

        logger.info("CheckDepsMCPServer initialized")

    def _register_tools(self) -> None:
        """Register MCP tools with the server.

        Registers:
        - resolve_dependencies: Resolve the file set of a check entrypoint
        - get_allowed_modules: List external names the runtime provides
        """

        @self.mcp.tool()
        async def resolve_dependencies(
            entrypoint: str,
            ctx: Context[ServerSession, None],
            allowed_packages: Optional[List[str]] = None,
        ) -> Dict[str, Any]:
            """Resolve every local file and package a check entrypoint depends on.

            Args:
                entrypoint: Path to a .js or .ts check file
                ctx: MCP context for logging and progress
                allowed_packages: Extra package names available in the runtime

            Returns:
                Dictionary with:
                - entrypoint: The requested entrypoint
                - success: Whether resolution succeeded
                - files: Resolved path -> content mapping (on success)
                - error: Structured error report (on failure)
            """
            await ctx.info(f"Resolving dependencies of {entrypoint}")
            response = self.resolve(entrypoint, allowed_packages)
            if response["success"]:
                await ctx.info(f"Resolved {len(response['files'])} file(s) for {entrypoint}")
            else:
                await ctx.error(response["error"]["message"])
            return response

        @self.mcp.tool()
        async def get_allowed_modules() -> Dict[str, Any]:
            """List the external module names a check may depend on.

            Returns:
                Dictionary with builtin_modules and allowed_packages lists.
            """
            return {
                "builtin_modules": sorted(self.config.builtin_modules),
                "allowed_packages": sorted(self.config.allowed_packages),
            }

        logger.info("MCP tools registered: resolve_dependencies, get_allowed_modules")

    def resolve(
        self, entrypoint: str, allowed_packages: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        """Resolve an entrypoint and format the outcome as a tool result."""
        config = self.config
        if allowed_packages:
            config = config.with_allowed_packages(allowed_packages)

        resolver = DependencyResolver.from_config(config, reader=self.reader)
        try:
            files = resolver.resolve(entrypoint)
        except DependencyResolutionError as e:
            return {"entrypoint": entrypoint, "success": False, "error": e.to_dict()}

        return {"entrypoint": entrypoint, "success": True, "files": files}

    def run(self, transport: str = "stdio") -> None:
        """Run the MCP server.

        Args:
            transport: Transport type to use. Options:
                - "stdio": Standard input/output (default)
                - "streamable-http": HTTP transport
                - "sse": Server-sent events transport
        """
        logger.info(f"Starting MCP server with {transport} transport")
        self.mcp.run(transport=transport)  # type: ignore[arg-type]


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Check dependency resolution MCP Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Configuration file (default: ./{CONFIG_FILENAME})",
    )
    parser.add_argument(
        "--transport",
        type=str,
        choices=["stdio", "streamable-http", "sse"],
        default="stdio",
        help="Transport type for MCP server. Default: stdio",
    )
    return parser.parse_args()


def main() -> None:
    """Main entry point for MCP server."""
    args = parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    server = CheckDepsMCPServer(config=Config(config_path=args.config))
    server.run(transport=args.transport)


if __name__ == "__main__":
    main()
