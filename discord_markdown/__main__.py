"""
Entry point for running the tools as a module:
    python -m discord_markdown
"""
from discord_markdown.cli import main


if __name__ == "__main__":
    main()
