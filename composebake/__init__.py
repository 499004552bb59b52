"""composebake - translate compose projects into bake build targets."""

__version__ = "0.1.0"
