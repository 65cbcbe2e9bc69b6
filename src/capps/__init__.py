"""capps - Azure Container Apps fleet control CLI

Philosophy:
- Ruthless simplicity
- Delegate to Azure CLI and SDK, don't reinvent
- Show the target set before touching it
- Fail fast with helpful guidance

capps lists, starts, stops and restarts Azure Container Apps across every
subscription visible to the logged-in Azure CLI user, and follows the logs
of a single app.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
