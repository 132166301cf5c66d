"""
AICommit

AI-powered commit messages from the working changes of a git repository.
"""

__version__ = "1.0.0"

# Short names accepted by --provider and the config file
PROVIDER_NAMES = ['anthropic', 'gemini', 'openai']
