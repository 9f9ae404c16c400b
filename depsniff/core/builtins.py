"""Built-in module names (Node.js and Sass)."""

from __future__ import annotations

# ``test`` is left out: it is only importable as ``node:test``.
NODE_BUILTINS = frozenset(
    {
        "_http_agent",
        "_http_client",
        "_http_common",
        "_http_incoming",
        "_http_outgoing",
        "_http_server",
        "_stream_duplex",
        "_stream_passthrough",
        "_stream_readable",
        "_stream_transform",
        "_stream_wrap",
        "_stream_writable",
        "_tls_common",
        "_tls_wrap",
        "assert",
        "assert/strict",
        "async_hooks",
        "buffer",
        "child_process",
        "cluster",
        "console",
        "constants",
        "crypto",
        "dgram",
        "diagnostics_channel",
        "dns",
        "dns/promises",
        "domain",
        "events",
        "fs",
        "fs/promises",
        "http",
        "http2",
        "https",
        "inspector",
        "inspector/promises",
        "module",
        "net",
        "os",
        "path",
        "path/posix",
        "path/win32",
        "perf_hooks",
        "process",
        "punycode",
        "querystring",
        "readline",
        "readline/promises",
        "repl",
        "stream",
        "stream/consumers",
        "stream/promises",
        "stream/web",
        "string_decoder",
        "sys",
        "timers",
        "timers/promises",
        "tls",
        "trace_events",
        "tty",
        "url",
        "util",
        "util/types",
        "v8",
        "vm",
        "wasi",
        "worker_threads",
        "zlib",
    }
)

NODE_PREFIX = "node:"

# @use "sass:math" and friends ship with the Sass compiler.
SASS_PREFIX = "sass:"


def is_core_module(name: str) -> bool:
    """Whether ``name`` names a runtime built-in rather than a project module.

    Exact matches only, so ``fs`` is core but ``fs-extra`` is not. Any
    ``node:``-prefixed name is core, whether or not it exists, and so is any
    ``sass:`` built-in Sass module.
    """
    return name.startswith((NODE_PREFIX, SASS_PREFIX)) or name in NODE_BUILTINS
