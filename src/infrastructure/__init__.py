"""
infrastructure - Concrete implementations of domain ports.

Contains all vendor-specific code: LangChain chat models, the ENS subgraph,
ensdata.net, Coinbase AgentKit wallets.
Depends on domain/ only (implements ports). Never imported by application/.
"""
