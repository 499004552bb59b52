"""Compose document loading and project validation."""
from composebake.config.loader import ComposeLoader
from composebake.config.validator import ProjectValidator
from composebake.models.errors import ComposeDecodeError, InvalidComposeProjectError

__all__ = ['ComposeLoader', 'ProjectValidator', 'ComposeDecodeError', 'InvalidComposeProjectError']
