"""Skill tool factory for creating dynamic skill tool."""

from typing import TYPE_CHECKING

from agentdeck.tools.base import BaseTool, tool

if TYPE_CHECKING:
    from agentdeck.core.registry import SkillRegistry
    from agentdeck.frontend import Frontend


def create_skill_tool(skill_registry: "SkillRegistry") -> BaseTool | None:
    """Factory function to create skill tool with dynamic schema.

    Args:
        skill_registry: SkillRegistry holding the last discovery result

    Returns:
        The activate_skill tool, or None if no enabled skills are available
    """
    skills = skill_registry.get_enabled()

    if not skills:
        return None

    # Build XML description of available skills
    skills_xml = "<skills>\n"
    for meta in skills:
        skills_xml += f'  <skill name="{meta.name}">{meta.description}</skill>\n'
    skills_xml += "</skills>"

    @tool(
        name="activate_skill",
        description=f"Load a specialized skill into the conversation. {skills_xml}",
        parameters={
            "type": "object",
            "properties": {
                "skill_name": {
                    "type": "string",
                    "enum": [meta.name for meta in skills],
                    "description": "The name of the skill to load",
                }
            },
            "required": ["skill_name"],
        },
    )
    async def activate_skill(frontend: "Frontend", skill_name: str) -> str:
        """Return the skill body, or an error message if it is gone or disabled."""
        skill = skill_registry.get(skill_name)
        if skill is None or skill.disabled:
            return f"Error: Skill '{skill_name}' not found. It may have been removed or is unavailable."
        return skill.body

    return activate_skill
