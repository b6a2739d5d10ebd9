"""
agent.prompt - System prompt for the ENS Savant agent.

A function that dynamically includes the registered data tools, so the
prompt never advertises a tool the agent was not given.
"""

from __future__ import annotations

from agent.tools.registry import ToolRegistry

AUTONOMOUS_THOUGHT = (
    "Analyze recent ENS activity and provide insights based on the latest registrations."
)

_EXAMPLE_RECORD = """{
  "id": "0x57500e790b83e93ccfcc7a9c62a98ea06fb5a69236d2d5d7113caa5f19c3894bca030000",
  "name": "dandybeegee",
  "owner": "0x10b836dd56108944d99c0199d54c98105cce70da",
  "transactionHash": "0x57500e790b83e93ccfcc7a9c62a98ea06fb5a69236d2d5d7113caa5f19c3894b",
  "blockNumber": 21797586,
  "blockTimestamp": 1738966931
}"""


def build_system_prompt(registry: ToolRegistry) -> str:
    """Build the system prompt with the capabilities of the registered tools.

    Args:
        registry: The tool registry with all registered data tools.

    Returns:
        The system prompt string.
    """
    names = registry.names()
    capabilities: list[str] = []
    rules: list[str] = []

    if "fetch_registrations" in names:
        capabilities.append(
            "Fetching the latest ENS domain registrations with the 'fetch_registrations' "
            "tool, passing the number of hours. The hours parameter specifies the time "
            "period, e.g. registrations in the last 24 hours."
        )
        rules.append(
            "When a user says something like \"show me the latest ENS registrations in the "
            "last 3 hours\", call 'fetch_registrations' with 3 and present the results. "
            "Each registration looks like this:\n" + _EXAMPLE_RECORD
        )
    if "fetch_registration_count" in names:
        capabilities.append(
            "Counting ENS domain registrations with the 'fetch_registration_count' tool, "
            "passing the number of hours. It returns a single number."
        )
        rules.append(
            "When a user says something like \"how many ENS domains were registered in the "
            "last 24 hours\", call 'fetch_registration_count' with 24 and present the "
            "result, which will be a number e.g. 1000. Prefer this tool over "
            "'fetch_registrations' whenever only a total is needed."
        )
    if "fetch_text_records" in names:
        capabilities.append(
            "Retrieving text records for an ENS name or wallet address with the "
            "'fetch_text_records' tool, passing the name or address as the query."
        )
        rules.append(
            "If the user asks for text records (e.g. \"get text records for ens.eth\" or "
            "\"get text records for 0x123...\"), call 'fetch_text_records' with that query."
        )

    capability_lines = "\n".join(f"{i}. {c}" for i, c in enumerate(capabilities, 1))
    rule_lines = "\n\n".join(rules)

    return f"""You are ENS Savant, an AI agent that provides users with up-to-date information on ENS data.
You also control an onchain wallet and can use its tools when the user explicitly asks for a wallet action.

Your capabilities include:
{capability_lines}

{rule_lines}

If a tool reports an error, tell the user the data could not be fetched; never guess numbers.
If you are unsure of the user's intent, ask clarifying questions.
Provide the results in a clear, concise JSON format."""
