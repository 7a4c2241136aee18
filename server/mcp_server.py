# Apple Developer Documentation MCP Server - JSON-RPC 2.0 over stdio
# Exposes documentation lookup and symbol search as Model Context Protocol tools

import sys, json, asyncio, logging
from typing import Dict, Any, Optional

from appledocs import AppleDocsClient, AppleDocsError, ResolutionKind
from config.settings import ClientSettings, load_settings
from observability.logging import setup_logging
from server import formatting
from server.updates import GitUpdateChecker, UpdateCheckError, format_update_status, format_update_failure

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"

# JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

TOOLS = [
    {
        "name": "list_technologies",
        "description": "List all available Apple technologies/frameworks",
        "inputSchema": {"type": "object", "properties": {}, "required": []}
    },
    {
        "name": "get_documentation",
        "description": (
            "Get detailed documentation for any symbol, class, struct, or framework. "
            "Automatically shows beta/deprecated status with warnings. Handles both framework names "
            "and full documentation paths. Examples: \"SwiftUI\", \"UIViewController\", "
            "\"documentation/SwiftUI/View\", \"FoundationModels\""
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "path": {
                    "type": "string",
                    "description": (
                        "Framework name (e.g., \"SwiftUI\", \"UIKit\") or full documentation path "
                        "(e.g., \"documentation/SwiftUI/View\", \"documentation/UIKit/UIViewController\")"
                    )
                }
            },
            "required": ["path"]
        }
    },
    {
        "name": "search_symbols",
        "description": (
            "Search for symbols across Apple frameworks with wildcard support (* and ?). "
            "Examples: \"RPBroadcast*\", \"*Controller\", \"*View*\". "
            "Can search globally or within specific framework."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": (
                        "Search query with wildcard support. Examples: \"RPBroadcast*\" (prefix), "
                        "\"*Controller\" (suffix), \"*View*\" (contains)"
                    )
                },
                "framework": {
                    "type": "string",
                    "description": "Optional: Search within specific framework only (e.g., \"UIKit\", \"SwiftUI\")"
                },
                "symbolType": {
                    "type": "string",
                    "description": "Optional: Filter by symbol type (class, protocol, struct, enum, function, etc.)"
                },
                "platform": {
                    "type": "string",
                    "description": "Optional: Filter by platform (iOS, macOS, tvOS, watchOS, visionOS)"
                },
                "maxResults": {
                    "type": "integer",
                    "description": "Optional: Maximum number of results (default: 20)",
                    "minimum": 1
                }
            },
            "required": ["query"]
        }
    },
    {
        "name": "check_updates",
        "description": "Check for available updates from the git repository",
        "inputSchema": {"type": "object", "properties": {}, "required": []}
    }
]


class JSONRPCError(Exception):
    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


def _text_result(text: str, is_error: bool = False) -> Dict[str, Any]:
    result = {"content": [{"type": "text", "text": text}]}
    if is_error:
        result["isError"] = True
    return result


class MCPServer:
    def __init__(self, client: AppleDocsClient, update_checker: Optional[GitUpdateChecker] = None):
        self.client = client
        self.update_checker = update_checker
        self.capabilities = {
            "tools": {
                "listChanged": False
            }
        }
        self.server_info = {
            "name": "apple-dev-docs-mcp",
            "version": "1.0.0"
        }
        self.session_initialized = False
        self.tool_handlers = {
            "list_technologies": self._tool_list_technologies,
            "get_documentation": self._tool_get_documentation,
            "search_symbols": self._tool_search_symbols,
            "check_updates": self._tool_check_updates,
        }

    async def handle_initialize(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Handle MCP initialize request"""
        client_info = params.get("clientInfo", {})
        logger.info(f"Initializing MCP session with client: {client_info.get('name', 'unknown')}")

        return {
            "protocolVersion": params.get("protocolVersion", PROTOCOL_VERSION),
            "capabilities": self.capabilities,
            "serverInfo": self.server_info
        }

    async def handle_initialized(self, params: Dict[str, Any]) -> None:
        self.session_initialized = True
        logger.info("MCP session initialized successfully")

    async def handle_tools_list(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {"tools": TOOLS}

    async def handle_tools_call(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Execute MCP tool calls.

        Client failures become ``isError`` tool results so the host can show
        them to the user; unknown tools are protocol errors.
        """
        name = params.get("name")
        arguments = params.get("arguments") or {}
        handler = self.tool_handlers.get(name)
        if handler is None:
            raise JSONRPCError(METHOD_NOT_FOUND, f"Unknown tool: {name}")
        if not isinstance(arguments, dict):
            raise JSONRPCError(INVALID_PARAMS, "Tool arguments must be an object")

        try:
            return await handler(arguments)
        except AppleDocsError as e:
            logger.warning(f"Tool {name} failed: {e}")
            return _text_result(formatting.format_error(e), is_error=True)
        except ValueError as e:
            return _text_result(f"Error: {e}", is_error=True)

    async def _tool_list_technologies(self, args: Dict[str, Any]) -> Dict[str, Any]:
        technologies = await self.client.get_technologies()
        return _text_result(formatting.format_technologies(technologies.values()))

    async def _tool_get_documentation(self, args: Dict[str, Any]) -> Dict[str, Any]:
        path = args.get("path")
        if not isinstance(path, str) or not path.strip():
            raise ValueError("'path' is required")

        resolution = await self.client.resolve(path)
        if resolution.kind == ResolutionKind.RESOLVED:
            return _text_result(formatting.format_documentation(resolution.payload))

        if resolution.kind == ResolutionKind.AMBIGUOUS_FRAMEWORK:
            framework_name = resolution.technology.title
            try:
                payload = await self.client.get_document(resolution.canonical_path)
            except AppleDocsError as e:
                logger.warning(f"Framework fallback for {framework_name} failed: {e}")
                return _text_result(formatting.format_symbol_not_found(path))
            return _text_result(formatting.format_framework_detected(payload, framework_name, path))

        raise resolution.error

    async def _tool_search_symbols(self, args: Dict[str, Any]) -> Dict[str, Any]:
        query = args.get("query")
        if not isinstance(query, str) or not query.strip():
            raise ValueError("'query' is required")
        for key in ("framework", "symbolType", "platform"):
            if args.get(key) is not None and not isinstance(args[key], str):
                raise ValueError(f"'{key}' must be a string")
        framework = args.get("framework") or None
        symbol_type = args.get("symbolType") or None
        platform = args.get("platform") or None
        max_results = args.get("maxResults")
        if max_results is not None:
            max_results = int(max_results)

        filters = self.client.make_filters(symbol_type, platform, max_results)
        if framework:
            results = await self.client.search_framework(framework, query, filters)
        else:
            results = await self.client.search_global(query, filters)

        return _text_result(formatting.format_search_results(query, results, framework, symbol_type, platform))

    async def _tool_check_updates(self, args: Dict[str, Any]) -> Dict[str, Any]:
        if self.update_checker is None:
            return _text_result(format_update_failure("Update checks are not configured"))
        try:
            status = await self.update_checker.check()
        except UpdateCheckError as e:
            return _text_result(format_update_failure(e))
        return _text_result(format_update_status(status))

    async def handle_request(self, request_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Main request handler following JSON-RPC 2.0 spec"""
        request_id = request_data.get("id") if isinstance(request_data, dict) else None
        try:
            if not isinstance(request_data, dict) or request_data.get("jsonrpc") != "2.0":
                raise JSONRPCError(INVALID_REQUEST, "Invalid JSON-RPC version")

            method = request_data.get("method")
            params = request_data.get("params") or {}
            if not method:
                raise JSONRPCError(INVALID_REQUEST, "Missing method")

            if method in ("initialized", "notifications/initialized"):
                await self.handle_initialized(params)
                return None
            if method.startswith("notifications/"):
                return None

            if method == "initialize":
                result = await self.handle_initialize(params)
            elif method == "ping":
                result = {}
            elif method == "tools/list":
                result = await self.handle_tools_list(params)
            elif method == "tools/call":
                result = await self.handle_tools_call(params)
            else:
                raise JSONRPCError(METHOD_NOT_FOUND, f"Unknown method: {method}")

            return {
                "jsonrpc": "2.0",
                "id": request_id,
                "result": result
            }

        except JSONRPCError as e:
            logger.error(f"Error handling request: {e.message}")
            return {
                "jsonrpc": "2.0",
                "id": request_id,
                "error": {"code": e.code, "message": e.message}
            }
        except Exception as e:
            logger.exception(f"Unexpected error handling request: {e}")
            return {
                "jsonrpc": "2.0",
                "id": request_id,
                "error": {
                    "code": INTERNAL_ERROR,
                    "message": f"Error executing tool: {e}"
                }
            }


async def announce_updates(checker: GitUpdateChecker) -> None:
    """Quiet startup check; only logs when updates are waiting."""
    try:
        behind = await checker.behind_count()
    except UpdateCheckError as e:
        logger.debug(f"Startup update check skipped: {e}")
        return
    if behind > 0:
        logger.warning(f"🔄 {behind} update{'s' if behind > 1 else ''} available! "
                       f"Use 'check_updates' tool for details and update instructions.")


def _write(response: Dict[str, Any]) -> None:
    sys.stdout.write(json.dumps(response) + "\n")
    sys.stdout.flush()


async def serve_stdio(server: MCPServer) -> None:
    """Read newline-delimited JSON-RPC requests from stdin until EOF."""
    loop = asyncio.get_running_loop()
    while True:
        line = await loop.run_in_executor(None, sys.stdin.readline)
        if not line:
            break
        if not line.strip():
            continue

        try:
            request_data = json.loads(line)
        except json.JSONDecodeError as e:
            _write({
                "jsonrpc": "2.0",
                "id": None,
                "error": {"code": PARSE_ERROR, "message": f"Parse error: {e}"}
            })
            continue

        response = await server.handle_request(request_data)
        if response:  # Don't send response for notifications
            _write(response)


async def main(settings: Optional[ClientSettings] = None):
    """Main entry point for MCP server"""
    settings = settings or load_settings()
    setup_logging(level=settings.log_level, log_file=settings.log_file, use_json=settings.log_json)

    checker = GitUpdateChecker(settings.repository_path, timeout=settings.git_timeout)
    if settings.check_updates_on_startup:
        await announce_updates(checker)

    async with AppleDocsClient(settings) as client:
        server = MCPServer(client, checker)
        logger.info("Apple Developer Documentation MCP server running on stdio")
        await serve_stdio(server)


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
