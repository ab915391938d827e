"""Terraform rendering for exported accounts."""

from .hcl import hcl_string, hcl_value, render_resource, sanitize_identifier
from .naming import ResourceNames
from .renderer import TerraformRenderer
from .writer import TerraformWriter

__all__ = [
    'hcl_string',
    'hcl_value',
    'render_resource',
    'sanitize_identifier',
    'ResourceNames',
    'TerraformRenderer',
    'TerraformWriter',
]
