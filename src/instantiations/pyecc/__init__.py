from .inst import EcOps, GtOps, PyEccEngine, make_engine, make_she_params

__all__ = ["EcOps", "GtOps", "PyEccEngine", "make_engine", "make_she_params"]
