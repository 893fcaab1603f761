"""Starter content for newly created agents and skills."""

from agentdeck.utils.def_loader import substitute_template

AGENT_BODY = """\
# {{name}} Agent

You are a specialized sub-agent.

## Expertise
<!-- Add your expertise here -->

## Approach
<!-- Define your methodology -->

## Constraints
<!-- List any limitations -->
"""

SKILL_BODY = """\
# {{name}} Skill

## Use Cases
<!-- Define when to use this skill -->

## Instructions
<!-- Detailed instructions for the model -->

## Examples
<!-- Positive and negative examples -->
"""

AGENT_GENERATION_PROMPT = """\
Create a sub-agent definition file for "{{name}}" based on our current \
conversation and the following goal: "{{goal}}".

Use this format exactly:
```markdown
---
name: "{{name}}"
description: "<Write a clear description of what this agent specializes in and when to delegate to it.>"
model: "inherit"
created_by: "assistant"
---

# {{name}} Agent

You are a specialized sub-agent focused on {{name}}-related tasks.

## Expertise
<Describe the specific domain knowledge this agent needs for the goal: "{{goal}}">

## Approach
<Step-by-step methodology this agent should follow>

## Constraints
- <Any limitations or boundaries for this agent>
```

IMPORTANT:
- Sub-agents run in an ISOLATED context, so they must be self-contained specialists
- Add a `tools:` list only to restrict the agent; leave it out to use the default tool set
- Save the file to: {{path}}
"""

SKILL_GENERATION_PROMPT = """\
Create a skill definition file for "{{name}}" based on our current \
conversation and the following goal: "{{goal}}".

Use this format exactly:
```markdown
---
name: "{{name}}"
description: "<Write a clear description of when this skill should activate. Include trigger phrases.>"
created_by: "assistant"
---

# {{name}} Skill

## Use Cases
<Scenarios where this skill applies, based on the goal: "{{goal}}">

## Instructions
<How the model should apply this skill's knowledge>

## Examples
<Examples of how this skill improves responses>
```

IMPORTANT:
- Skills teach behaviour inside the SAME context; capture real expertise, not a generic template
- Save the file to: {{path}}
"""

_BODIES = {"agent": AGENT_BODY, "skill": SKILL_BODY}
_PROMPTS = {"agent": AGENT_GENERATION_PROMPT, "skill": SKILL_GENERATION_PROMPT}
_DEFAULT_GOALS = {
    "agent": "General-purpose specialist",
    "skill": "General-purpose knowledge",
}


def starter_frontmatter(kind: str, name: str) -> dict[str, str]:
    """Front matter written for a manually created definition."""
    if kind == "agent":
        return {
            "name": name,
            "description": f"A specialized agent for {name}-related tasks.",
            "model": "inherit",
            "created_by": "manual",
        }
    return {
        "name": name,
        "description": "<Write a clear description of when this skill should activate.>",
        "created_by": "manual",
    }


def starter_body(kind: str, name: str) -> str:
    return substitute_template(_BODIES[kind], {"name": name})


def generation_prompt(kind: str, name: str, goal: str | None, path: str) -> str:
    """Prompt asking the assistant to write the definition file itself."""
    return substitute_template(
        _PROMPTS[kind],
        {"name": name, "goal": goal or _DEFAULT_GOALS[kind], "path": path},
    )
