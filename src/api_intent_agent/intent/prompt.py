"""Prompt rendering for endpoint selection."""

from .models import AnalyzedInput

PREAMBLE = "Context: I have an HTTP API with the following endpoints:"

INSTRUCTIONS = """Based on the user input and available endpoints, please:
1. Identify the most relevant endpoint
2. Explain why this endpoint matches the user's intent
3. Provide a structured response with the endpoint details

Respond with a single JSON object and nothing else."""

RESPONSE_FORMAT = """Response Format:
{
  "endpoint": "<path>",
  "method": "<method>",
  "confidence": <number between 0 and 1>,
  "explanation": "<explanation>"
}"""


def _render_endpoint(endpoint) -> str:
    return (
        f"Path: {endpoint.path}\n"
        f"Method: {endpoint.method}\n"
        f"Description: {endpoint.description}\n"
    )


def build_prompt(user_text: str, analyzed: AnalyzedInput) -> str:
    """Render the selection prompt. Same inputs always give the same text."""
    endpoint_blocks = "\n".join(_render_endpoint(ep) for ep in analyzed.candidates)
    return (
        f"{PREAMBLE}\n"
        f"{endpoint_blocks}\n"
        f'User Input: "{user_text}"\n\n'
        f"{INSTRUCTIONS}\n\n"
        f"{RESPONSE_FORMAT}\n"
    )
