"""Prompt templates for the plan chain and the tool-calling agent."""

from datetime import date

OBJECTIVE = "Create a video about the winner of the most recent champions league"

PLAN_PROMPT = """Given an objective, create a step-by-step plan using ONLY the abilities listed below.
Each step must correspond to exactly one ability and include a clear description of what needs to be done and what output is expected.

### Abilities
{abilities}

### Objective
{objective}

### Instructions
1. Use ONLY the abilities listed above
2. Each step must:
   - Map to exactly one ability
   - Explain what action to perform and what input parameters to use
   - Reference any data from previous steps explicitly
3. The final step's output must achieve the objective
4. Do not add explanatory or supplementary steps
5. Do not assume abilities that aren't listed

Remember, only use the provided abilities to create the step-by-step plan.

Today's date: {today}

{format_instructions}

### Your Plan:"""

SYSTEM_PROMPT = """You are a helpful AI assistant designed to provide clear, direct responses to user queries.

Key Instructions:
1. Provide responses directly without meta-commentary, explanations of your process, or unnecessary acknowledgments
2. Do not preface responses with phrases like "Here's your response" or "I'll help you with that"
3. Do not conclude responses with questions about satisfaction or offers for further assistance
4. Stay focused on the specific task or query presented
5. If you need clarification, ask concise, specific questions

Today's date: {today}

Remember: Your role is to provide accurate, helpful responses in the most direct manner possible. Do not add pleasantries, meta-commentary, or explanations about your own behavior."""


def format_today(today: date | None = None) -> str:
    """Date as written in the prompts, e.g. '17th of December 2024'."""
    d = today or date.today()
    if 11 <= d.day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(d.day % 10, "th")
    return f"{d.day}{suffix} of {d.strftime('%B')} {d.year}"


def system_prompt(today: date | None = None) -> str:
    return SYSTEM_PROMPT.format(today=format_today(today))
