"""Prompt construction for AI-assisted block rewriting."""

from typing import Optional, Tuple

from vita.contexts.editing.blocks import BlockType

RESUME_WRITER = "You are an expert resume writer."

SYSTEM_PROMPTS = {
    BlockType.SUMMARY: (
        f"{RESUME_WRITER} Improve the following professional summary to be concise, impactful, "
        "and achievement-oriented. Focus on quantifiable results and key skills."
    ),
    BlockType.EXPERIENCE: (
        f"{RESUME_WRITER} Improve the following job description to be concise, impactful, and "
        "achievement-oriented. Use strong action verbs and focus on quantifiable results."
    ),
    BlockType.SKILLS: (
        f"{RESUME_WRITER} Based on the following skills list, suggest a more comprehensive and "
        "well-organized set of skills."
    ),
}

DEFAULT_SYSTEM_PROMPT = (
    f"{RESUME_WRITER} Improve the following resume content to be more professional, "
    "concise, and impactful."
)

TARGET_ROLE_SUFFIXES = {
    BlockType.SUMMARY: " Tailor it for a {role} position.",
    BlockType.EXPERIENCE: " Highlight skills and achievements relevant to a {role} position.",
    BlockType.SKILLS: " Focus on skills most relevant to a {role} position.",
}

DEFAULT_TARGET_ROLE_SUFFIX = " Keep it relevant to a {role} position."


def build_prompts(
    block_type: BlockType,
    source_text: str,
    target_role: Optional[str] = None,
    job_description: Optional[str] = None,
) -> Tuple[str, str]:
    """
    Build (system_prompt, user_prompt) for a rewrite request.

    Skills requests ask for a comma-separated list; everything else asks for a
    rewritten version of the source text.
    """
    system_prompt = SYSTEM_PROMPTS.get(block_type, DEFAULT_SYSTEM_PROMPT)
    if target_role and target_role.strip():
        suffix = TARGET_ROLE_SUFFIXES.get(block_type, DEFAULT_TARGET_ROLE_SUFFIX)
        system_prompt += suffix.format(role=target_role.strip())

    if block_type is BlockType.SKILLS:
        parts = [f"Current skills: {source_text or '(none)'}"]
        if job_description and job_description.strip():
            parts.append(f"Job description:\n{job_description.strip()}")
        parts.append("Suggested improved skills (return as a comma-separated list):")
        return system_prompt, "\n\n".join(parts)

    return system_prompt, f"Original content:\n{source_text}\n\nImproved version:"
