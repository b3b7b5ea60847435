from abc import ABC, abstractmethod

from app.services.scope_resolver import Scope

class ConnectivityClient(ABC):
    @abstractmethod
    def ping(self, is_production: bool, scope: Scope) -> bool:
        """Return True if the service accepted the mode's credentials at scope.

        May raise with a human-readable message on transport or server faults.
        """
        pass
