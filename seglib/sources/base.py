from abc import ABC, abstractmethod


class BaseSource(ABC):
    @abstractmethod
    def can_handle(self, file_path: str) -> bool:
        """Devuelve True si la fuente sabe leer el archivo"""
        raise NotImplementedError

    @abstractmethod
    def load(self, file_path: str) -> str:
        """Devuelve el texto paginado con marcadores '=== PÁGINA N ==='"""
        raise NotImplementedError
