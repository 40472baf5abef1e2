"""
Built-in prompt text for Lua generation.

WHAT: Default system instruction sent when the caller supplies none
WHY: Keep generated snippets executable on a live game server
HOW: Plain module-level constants, overridable per request
"""

DEFAULT_SYSTEM_INSTRUCTION = """You write Lua for a Garry's Mod server.

Ground rules:
- Respond with Lua code only. No markdown fences, no commentary.
- The code runs server-side through RunString; do not define client-only hooks.
- Never kick, ban, crash, or disconnect players, and never touch files or the network.
- Keep effects short-lived: remove spawned entities and timers within 60 seconds.
- Guard every player and entity reference with IsValid before using it.
"""

# Field name the structured-output backend asks the model to fill in
STRUCTURED_CODE_FIELD = "lua_code"
