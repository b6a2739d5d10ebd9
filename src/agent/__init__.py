"""
agent - Conversational agent orchestration layer.

Contains tools, prompts, the fragment model, the single-flight agent
holder and the executor that streams the LLM + tool loop.
Depends on domain/ and application/. Never imports from infrastructure/.
"""
