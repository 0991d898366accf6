"""Plain-text tree rendering for discovery reports.

Output is a function of the input lists only: no colour, no terminal
width, no locale. Both layouts cap the number of rendered items at
TREE_LIMIT and summarise the rest on a final `… <k> more` line.
"""

from typing import Sequence

TREE_LIMIT = 30

BRANCH = "├─ "
LAST = "└─ "
ELLIPSIS = "…"

# Items of a nested list sit under a labelled branch
_NESTED_INDENT = "   "


def render_tree(entries: Sequence[str], level: int = 1, limit: int = TREE_LIMIT) -> list[str]:
    """Render entries as one level of a tree.

    The last rendered entry gets the closing connector even when a summary
    line follows it.
    """
    indent = " " * (2 * max(level - 1, 0))
    shown = list(entries[:limit])
    lines = [
        indent + (LAST if i == len(shown) - 1 else BRANCH) + entry
        for i, entry in enumerate(shown)
    ]
    hidden = len(entries) - len(shown)
    if hidden > 0:
        lines.append(f"{indent}{LAST}{ELLIPSIS} {hidden} more")
    return lines


def render_list(root: str, label: str, items: Sequence[str], limit: int = TREE_LIMIT) -> list[str]:
    """Render `root`, a single `label [n=<count>]` branch, and its items.

    Unlike render_tree, the last shown item keeps the open connector when a
    summary line follows.
    """
    lines = [root, f"{LAST}{label} [n={len(items)}]"]
    shown = list(items[:limit])
    overflow = len(items) > limit
    for i, item in enumerate(shown):
        connector = LAST if i == len(shown) - 1 and not overflow else BRANCH
        lines.append(_NESTED_INDENT + connector + item)
    if overflow:
        lines.append(f"{_NESTED_INDENT}{LAST}{ELLIPSIS} {len(items) - limit} more")
    return lines


def render_report(title: str, entries: Sequence[str], placeholder: str | None = None) -> list[str]:
    """Title line followed by a one-level tree.

    When entries is empty and a placeholder is given, the placeholder is
    rendered as the only entry.
    """
    if not entries and placeholder:
        entries = [placeholder]
    return [title, *render_tree(entries, level=1)]
