"""Application entity representing an Entra ID app registration."""

from dataclasses import dataclass, field

from .credential import Credential

UNNAMED_APPLICATION = "Unnamed app"


@dataclass(slots=True)
class Application:
    """An Entra ID application registration."""

    id: str
    display_name: str | None
    app_id: str = ""
    credentials: list[Credential] = field(default_factory=list)

    @property
    def name(self) -> str:
        """Display name, or a fixed placeholder when the registration has none."""
        return self.display_name or UNNAMED_APPLICATION

    def add_credential(self, credential: Credential) -> None:
        """Add a credential to this application."""
        self.credentials.append(credential)
