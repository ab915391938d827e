"""Rollbar Terraform Importer

Exports the projects, teams, users and access tokens of a Rollbar account
as Terraform resources together with the matching import commands.
"""

__version__ = '0.1.0'

from .cli.main import main

__all__ = ['main']
