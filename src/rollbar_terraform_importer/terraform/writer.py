"""Writes rendered Terraform files to disk."""

import stat
from pathlib import Path
from typing import List, Union

from loguru import logger

from .renderer import TerraformRenderer

SINGLE_FILE = 'rollbar_account.tf'
MAIN_FILE = 'main.tf'
TEAMS_FILE = 'teams.tf'
PROJECTS_FILE = 'projects.tf'
ACCESS_TOKENS_FILE = 'access_tokens.tf'
USERS_FILE = 'users.tf'
IMPORT_SCRIPT = 'import.sh'


class TerraformWriter:
    """Writes rendered account text into an existing output directory.

    Files are truncated on every run, so re-running an export replaces the
    previous output instead of appending to it.
    """

    def __init__(self, output_dir: Union[str, Path]):
        """Initialize writer.

        Args:
            output_dir: Directory the files are written to

        Raises:
            NotADirectoryError: If ``output_dir`` does not exist
        """
        self.output_dir = Path(output_dir)
        if not self.output_dir.is_dir():
            raise NotADirectoryError(
                f'Invalid file path provided for output: {output_dir}'
            )
        self.logger = logger.bind(component='TerraformWriter')

    def write(self, filename: str, content: str) -> Path:
        """Write ``content`` to ``filename`` inside the output directory."""
        path = self.output_dir / filename
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        self.logger.debug(f'Wrote {len(content)} bytes to {path}')
        return path

    def write_import_script(self, renderer: TerraformRenderer) -> Path:
        """Write the import commands and mark the script executable."""
        path = self.write(IMPORT_SCRIPT, renderer.render_import_script())
        mode = path.stat().st_mode
        path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    def write_single_file(self, renderer: TerraformRenderer) -> List[Path]:
        """Write every resource to ``rollbar_account.tf`` plus the import script."""
        return [
            self.write(SINGLE_FILE, renderer.render_all()),
            self.write_import_script(renderer),
        ]

    def write_split_files(self, renderer: TerraformRenderer) -> List[Path]:
        """Write one file per resource topic plus the import script."""
        return [
            self.write(MAIN_FILE, renderer.render_provider()),
            self.write(TEAMS_FILE, renderer.render_teams()),
            self.write(PROJECTS_FILE, renderer.render_projects()),
            self.write(ACCESS_TOKENS_FILE, renderer.render_access_tokens()),
            self.write(USERS_FILE, renderer.render_users()),
            self.write_import_script(renderer),
        ]

    def write_account(
        self, renderer: TerraformRenderer, single_file: bool = False
    ) -> List[Path]:
        """Write the account using the requested layout.

        Returns:
            Paths of the written files
        """
        if single_file:
            paths = self.write_single_file(renderer)
        else:
            paths = self.write_split_files(renderer)

        self.logger.info(f'Wrote {len(paths)} files to {self.output_dir}')
        return paths
