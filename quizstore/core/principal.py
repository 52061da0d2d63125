from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    """
    Identité unique du système: la clé de licence (partagée entre appareils).
    Obtenue via LicenseRegistry.authorize() puis passée explicitement aux stores.
    """

    license_key: str

    def __repr__(self) -> str:
        from quizstore.core.logging import mask_key
        return f"Principal({mask_key(self.license_key)})"
