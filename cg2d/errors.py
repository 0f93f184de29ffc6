"""Помилки тріангуляції. Усі відновлювані: сітка лишається у стані до кроку."""


class DelaunayError(Exception):
    """Базовий клас помилок cg2d."""


class DegenerateInputError(DelaunayError):
    """Точки (поки що) колінеарні: тріангуляція порожня або невизначена."""


class DuplicateVertexError(DelaunayError):
    """Точка точно збігається з уже вставленою вершиною (політика RAISE)."""

    def __init__(self, point, existing: int):
        super().__init__(f"point {tuple(point)} duplicates vertex {existing}")
        self.point = point
        self.existing = existing


class DegenerateTriangleError(DelaunayError):
    """Ретріангуляція дала б трикутник нульової площі."""


class ConfigurationError(DelaunayError):
    """Неможливо побудувати супер-трикутник із заданих меж."""


class OutOfDomainError(ConfigurationError):
    """Точка поза супер-трикутником: область задано замалою."""


class MeshFinalizedError(DelaunayError):
    """Вставка після finalize()."""
