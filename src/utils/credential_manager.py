"""
Credential Manager Module
Handles secure credential storage and retrieval with CLI prompts.
"""

import os
from pathlib import Path
from typing import Optional

import structlog
from dotenv import load_dotenv, set_key
from rich.console import Console
from rich.prompt import Prompt

console = Console()
logger = structlog.get_logger(__name__)

GEMINI_API_KEY = "GEMINI_API_KEY"
# Legacy variable name, accepted as a fallback.
LEGACY_API_KEY = "API_KEY"


class CredentialManager:
    """Manages credentials with secure storage and CLI prompting."""

    def __init__(self, env_file: Path = Path(".env"), interactive: bool = True):
        """
        Initialize credential manager.

        Args:
            env_file: Path to .env file for credential storage
            interactive: Whether missing credentials may be prompted for
        """
        self.env_file = env_file
        self.interactive = interactive
        logger.info("credential_manager_initialized", env_file=str(env_file))
        self._load_credentials()

    def _load_credentials(self) -> None:
        """Load existing credentials from .env file."""
        if self.env_file.exists():
            load_dotenv(self.env_file)
            logger.info("credentials_loaded_from_env", env_file=str(self.env_file))
            self._set_secure_permissions()
        else:
            logger.debug("no_env_file_found", env_file=str(self.env_file))

    def _set_secure_permissions(self) -> None:
        """Set secure file permissions on .env file (Unix only)."""
        if os.name != "nt":
            try:
                os.chmod(self.env_file, 0o600)  # rw-------
                logger.debug(
                    "secure_permissions_set", env_file=str(self.env_file), mode="0600"
                )
            except OSError as e:
                console.print(
                    f"[yellow][!] Could not set secure permissions on .env: {e}[/yellow]"
                )
                logger.warning(
                    "failed_to_set_permissions",
                    env_file=str(self.env_file),
                    error=str(e),
                )

    def get_credential(
        self,
        key: str,
        prompt_message: str,
        is_password: bool = False,
        required: bool = True,
        fallback_keys: tuple[str, ...] = (),
    ) -> Optional[str]:
        """
        Get credential from environment or prompt user.

        Args:
            key: Environment variable name (e.g., "GEMINI_API_KEY")
            prompt_message: Message to display when prompting
            is_password: Whether to mask input (for passwords)
            required: Whether credential is required
            fallback_keys: Other environment variables checked after ``key``

        Returns:
            Credential value or None if optional and not provided

        Raises:
            ValueError: If required credential not provided
        """
        for name in (key, *fallback_keys):
            value = os.getenv(name)
            if value:
                logger.debug("credential_found_in_env", key=name, is_password=is_password)
                return value

        if not self.interactive:
            if required:
                logger.error("required_credential_not_provided", key=key)
                raise ValueError(f"Required credential not provided: {key}")
            return None

        logger.info(
            "prompting_for_credential",
            key=key,
            is_password=is_password,
            required=required,
        )
        console.print(f"\n[yellow][*] Credential Required: {key}[/yellow]")
        console.print(f"   {prompt_message}\n")

        value = Prompt.ask("   Enter value", password=is_password)

        if not value and required:
            logger.error("required_credential_not_provided", key=key)
            raise ValueError(f"Required credential not provided: {key}")

        if value:
            self._save_credential(key, value)

        return value or None

    def _save_credential(self, key: str, value: str) -> None:
        """
        Save credential to .env file.

        Args:
            key: Environment variable name
            value: Credential value
        """
        try:
            set_key(self.env_file, key, value)
            os.environ[key] = value
            self._set_secure_permissions()
            console.print(f"   [green][+] Saved {key} to .env[/green]\n")
            logger.info("credential_saved", key=key, env_file=str(self.env_file))
        except OSError as e:
            console.print(f"   [red][X] Failed to save credential: {e}[/red]\n")
            logger.error("failed_to_save_credential", key=key, error=str(e))
            raise

    def get_gemini_api_key(self) -> str:
        """Return the Gemini API key, prompting for it when missing.

        Raises:
            ValueError: If no key is available
        """
        value = self.get_credential(
            GEMINI_API_KEY,
            "Google Gemini API key used for portfolio analysis",
            is_password=True,
            required=True,
            fallback_keys=(LEGACY_API_KEY,),
        )
        if not value:
            raise ValueError(f"Required credential not provided: {GEMINI_API_KEY}")
        return value
