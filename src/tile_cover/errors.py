from __future__ import annotations


class TileCoverError(RuntimeError):
    pass


class UnsupportedGeometryError(TileCoverError):
    pass


class DegenerateInputError(TileCoverError):
    pass


class TileLimitExceededError(TileCoverError):
    pass
