"""Formatação humana de violações de schema.

Agrupa as issues por path de primeiro nível para que o autor do manifest
enxergue todos os problemas de uma seção de uma só vez.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from .types import ValidationIssue


def _section(path: str) -> str:
    head = path.split(".", 1)[0]
    return head.split("[", 1)[0] or "<root>"


def format_issues(issues: Sequence[ValidationIssue], *, title: str = "Configuration is invalid") -> str:
    """Renderiza as issues em um relatório multi-linha, agrupado por seção."""
    if not issues:
        return f"{title}: no issues"

    grouped: Dict[str, List[ValidationIssue]] = {}
    for issue in issues:
        grouped.setdefault(_section(issue.path), []).append(issue)

    lines = [f"{title} ({len(issues)} issue(s)):"]
    for section in sorted(grouped):
        lines.append(f"  [{section}]")
        for issue in grouped[section]:
            lines.append(f"    - {issue.path or '<root>'} ({issue.code}): {issue.message}")
    return "\n".join(lines)
