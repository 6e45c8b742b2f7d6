from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TranslationCheck:
    """Result of Matrix.is_translation().

    tx and ty are always read from the translation column, even when the
    matrix does more than translate (is_translation is False then).
    """
    is_translation: bool
    tx: float
    ty: float

    def __bool__(self) -> bool:
        return self.is_translation
