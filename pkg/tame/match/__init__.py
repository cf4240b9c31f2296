from .score import bipartite_matching, score_fn
from .tame import TAMESolver, ctame, tame, timer
from .tensor import TriangleTensor, as_matrix, c_imp_ttv, imp_ttv
