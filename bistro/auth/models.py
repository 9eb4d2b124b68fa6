from typing import Optional, Dict, Any

from bistro.errors import BistroError


class AccessResult:
    """
    Résultat d'un garde d'accès (vérification d'identité ou de rôle).
    - success=True: identity contient au minimum {"email"}
    - success=False: error porte l'erreur typée (Unauthorized/Forbidden) à lever
    """

    def __init__(
        self,
        success: bool,
        identity: Optional[Dict[str, Any]] = None,
        error: Optional[BistroError] = None,
    ):
        self.success = success
        self.identity = identity
        self.error = error

    @property
    def email(self) -> Optional[str]:
        return (self.identity or {}).get("email")

    def unwrap(self) -> Dict[str, Any]:
        """Retourne l'identité ou lève l'erreur portée par le résultat."""
        if not self.success:
            raise self.error or BistroError()
        return self.identity or {}

    @classmethod
    def ok(cls, identity: Dict[str, Any]) -> "AccessResult":
        return cls(True, identity=identity)

    @classmethod
    def fail(cls, error: BistroError) -> "AccessResult":
        return cls(False, error=error)
