"""
Documentation generator for table commands.

Agent-oriented documentation: semantics, guarantees, failure modes and
composition patterns in markdown.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import sys


def _bullets(items: list[str], bold: bool = False, code: bool = False) -> list[str]:
    if bold:
        return [f"- **{item}**" for item in items]
    if code:
        return [f"- `{item}`" for item in items]
    return [f"- {item}" for item in items]


def _pairs(pairs: dict[str, str]) -> list[str]:
    return [f"- **{key}**: {value}" for key, value in pairs.items()]


def generate_doc(
    name: str,
    synopsis: str,
    description: str,
    properties: dict[str, str],
    guarantees: list[str],
    when_to_apply: list[str],
    examples: list[dict[str, str]],
    composability: list[dict[str, str]],
    failure_modes: list[str],
    see_also: list[str],
) -> str:
    """
    Generate agent-oriented documentation in markdown format.

    Args:
        name: Command name and brief description
        synopsis: Command syntax
        description: Detailed description
        properties: Behavioral properties (blocking, idempotency, ...)
        guarantees: List of guarantees
        when_to_apply: List of use cases
        examples: Practical examples, each with title and code
        composability: Composition patterns, each with title, code and optional note
        failure_modes: Exit codes and what causes them
        see_also: Related commands

    Returns:
        Markdown-formatted documentation string
    """
    lines = [f"# {name}", "", "## SYNOPSIS", "```bash", synopsis, "```", ""]
    lines += ["## DESCRIPTION", description, ""]

    if properties:
        lines += ["### Properties", *_pairs(properties), ""]

    if guarantees:
        lines += ["## GUARANTEES", *_bullets(guarantees, bold=True), ""]

    if when_to_apply:
        lines += ["## WHEN TO APPLY", *_bullets(when_to_apply, bold=True), ""]

    if examples:
        lines += ["## PRACTICAL EXAMPLES", ""]
        for idx, example in enumerate(examples, 1):
            lines += [f"### Example {idx}: {example['title']}", "```bash", example["code"]]
            lines += ["```", ""]

    if composability:
        lines += ["## COMPOSABILITY", ""]
        for idx, comp in enumerate(composability, 1):
            lines += [f"### Composition {idx}: {comp['title']}", "```bash", comp["code"], "```"]
            if "note" in comp:
                lines.append(f"_{comp['note']}_")
            lines.append("")

    if failure_modes:
        lines += ["## FAILURE MODES", *_bullets(failure_modes, code=True), ""]

    if see_also:
        lines += ["## SEE ALSO", ", ".join(see_also)]

    return "\n".join(lines) + "\n"


def display_doc(doc_content: str) -> None:
    """
    Print documentation to stderr and exit.

    Args:
        doc_content: Markdown documentation content
    """
    print(doc_content, file=sys.stderr)
    sys.exit(0)
