from .errors import DimensionMismatch, NumericDegenerate, OutOfRange, TAMEError
from .graph import Graph, as_graph
from .match import (
    TAMESolver,
    TriangleTensor,
    bipartite_matching,
    c_imp_ttv,
    ctame,
    imp_ttv,
    score_fn,
    tame,
)

__version__ = "0.1.0"
