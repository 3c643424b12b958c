"""
Generators — render one framework document each from a ProjectState.

Each module exposes ``render_*`` functions that take the state (plus the
entity, for per-feature and per-task files) and return markdown. They
never mutate the state and never read ``markdown_overrides``; the
assembler in ``framework_generate`` applies overrides afterwards.
"""
