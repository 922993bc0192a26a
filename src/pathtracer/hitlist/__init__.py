from .hitlist import HitIndex, HitList, MaterialKind

__all__ = ["HitIndex", "HitList", "MaterialKind"]
