"""
Deckhand - Document rendering through Quarto with a forgiving executable lookup

Takes a Markdown document with a YAML header, checks the header against a fixed
rendering policy, writes it to a temporary file, runs Quarto from whichever
installation it can find, and hands back the path of the produced artifact.

Architecture:
- Intake Context: Header extraction and policy validation
- Rendering Context: Executable resolution, Quarto invocation, output discovery
- Delivery Context: Exporting and saving rendered artifacts
"""

__version__ = "0.1.0"
