"""GardenSync: settings panel for a GitHub-hosted digital garden."""

__version__ = "0.3.0"
