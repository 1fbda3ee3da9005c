"""Prompt Builder - Construct LLM prompts for commit message generation."""

from dataclasses import dataclass

from opencommit import COMMIT_TYPES

# Bullet count by file count: (min_files, bullet_range)
BULLET_THRESHOLDS = [
    (15, "5-6"),
    (8, "4-5"),
    (4, "3-4"),
    (0, "1-2"),
]

_EXAMPLE_SUBJECT = "type(scope): [imperative verb + what changed]"

_EXAMPLE_BULLETS = """\
- [bullet: specific detail from the diff]
- [bullet: why or impact if relevant]"""


@dataclass
class PromptConfig:
    """Settings that shape the prompt."""
    file_count: int = 0
    include_body: bool = True
    max_subject_length: int = 72


class PromptBuilder:
    """Constructs prompts for commit message generation from a raw diff."""

    def build(self, diff: str, config: PromptConfig | None = None) -> str:
        config = config or PromptConfig()
        sections = [
            self._build_role_section(),
            self._build_format_section(config),
            self._build_examples_section(config),
            self._build_diff_section(diff, config),
            self._build_final_instructions(config),
        ]
        return "\n\n".join(sections)

    def _build_role_section(self) -> str:
        return """You are an expert at writing git commit messages. Your commit messages are documentation for future developers.

Core principles:
- The DIFF shows WHAT changed. Your job is to explain WHY.
- If the commit does multiple things, focus on the most significant change.
- Write a subject that completes: "If applied, this commit will..."

Scope selection:
- ALWAYS include a scope in parentheses, e.g. feat(auth):, fix(api):
- Use ONE WORD: module, feature or component name, never a file path"""

    def _build_format_section(self, config: PromptConfig) -> str:
        format_desc = f"type(scope): subject line (lowercase, imperative mood, max {config.max_subject_length} chars)"
        types_list = "\n".join(f"  - {t}: {desc}" for t, desc in COMMIT_TYPES.items())

        if config.include_body:
            bullets = self._get_bullet_range(config.file_count)
            body_section = f"\n- bullet points explaining the changes\n\nWrite {bullets} bullets for this change ({config.file_count} files)."
        else:
            body_section = "\nDo NOT include a body or bullet points. Subject line only."

        return f"""<format>
Write commit messages in this exact format:

{format_desc}
{body_section}

Choose the most appropriate type:
{types_list}
</format>"""

    def _get_bullet_range(self, file_count: int) -> str:
        for threshold, range_str in BULLET_THRESHOLDS:
            if file_count >= threshold:
                return range_str
        return BULLET_THRESHOLDS[-1][1]

    def _build_examples_section(self, config: PromptConfig) -> str:
        example = _EXAMPLE_SUBJECT
        if config.include_body:
            example += "\n\n" + _EXAMPLE_BULLETS

        return f"""<format-examples>
CRITICAL: These show FORMAT only. Never use words from these examples. Analyze the ACTUAL diff below.

{example}
</format-examples>"""

    def _build_diff_section(self, diff: str, config: PromptConfig) -> str:
        return "\n".join([
            "<changes>",
            f"FILES CHANGED: {config.file_count}",
            "",
            diff.strip(),
            "</changes>",
        ])

    def _build_final_instructions(self, config: PromptConfig) -> str:
        body_rule = "- Include bullet points in the body" if config.include_body else "- Do NOT include a body, subject line only"

        return f"""<instructions>
Generate exactly ONE commit message.

Rules:
- Start directly with the type(scope): subject line
- No markdown formatting (no ```, no bold)
- No preamble like "Here's a commit message:"
- No explanation after the message
{body_rule}
- Just the raw commit message, ready to use
</instructions>"""
