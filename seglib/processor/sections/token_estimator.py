from abc import ABC, abstractmethod


class TokenEstimator(ABC):
    @abstractmethod
    def estimate(self, text: str) -> int: ...


class WordTokenEstimator(TokenEstimator):
    """
    Cuenta palabras separadas por espacios en blanco.
    Es la unidad de tamaño que usan los umbrales de subdivisión.
    """
    def estimate(self, text: str) -> int:
        if not text or not text.strip():
            return 0
        return len(text.split())


class TikTokenEstimator(TokenEstimator):
    """
    Estimacion exacta usando tiktoken (libreria de OpenAI)
    Swap-in cuando se necesite precision real.
    """
    def __init__(self, model: str = "gpt-4"):
        import tiktoken
        self._enc = tiktoken.encoding_for_model(model)

    def estimate(self, text: str) -> int:
        if not text:
            return 0
        return len(self._enc.encode(text))


def build_estimator(name: str = "words", model: str = "gpt-4") -> TokenEstimator:
    if name == "tiktoken":
        return TikTokenEstimator(model)
    if name == "words":
        return WordTokenEstimator()
    raise ValueError(f"Estimador de tokens desconocido: '{name}'")
