#%%

import time

import numpy as np
import pandas as pd
from graspologic.simulations import er_corr
from tqdm.autonotebook import tqdm

from tame import Graph, TAMESolver
from tame.match import timer

rng = np.random.default_rng(8888)

# compile the numba kernels before timing anything
A, B = er_corr(10, 0.5, 0.9, directed=False, loops=False)
timer(TAMESolver(A, B, maxiter=2).solve)()

#%%

ns = [25, 50, 100, 150]

rho = 0.9


def match_experiment(A, B, convex=False, maxiter=10):
    n = B.shape[0]
    perm = rng.permutation(n)
    undo_perm = np.argsort(perm)
    B = B[perm][:, perm]

    G, H = Graph(A), Graph(B)

    currtime = time.time()
    solver = TAMESolver(G, H, maxiter=maxiter, convex=convex).solve()
    elapsed = time.time() - currtime

    ma, mb = solver.matching_
    match_ratio = (mb == undo_perm[ma]).sum() / n

    result = {}
    result["n"] = n
    result["implementation"] = "ctame" if convex else "tame"
    result["triangles_A"] = G.count_triangles()
    result["triangles_B"] = H.count_triangles()
    result["score"] = solver.score_
    result["match_ratio"] = match_ratio
    result["n_iter"] = solver.n_iter_
    result["converged"] = solver.converged_
    result["time"] = elapsed
    return result


n_sims = 3
rows = []

with tqdm(total=len(ns) * 2 * n_sims) as pbar:
    for n in ns:
        for _ in range(n_sims):
            p = 4 * np.log(n) / n
            A, B = er_corr(n, p, r=rho, directed=False, loops=False)

            for convex in [False, True]:
                pbar.update(1)
                result = match_experiment(A, B, convex=convex)
                rows.append(result)

results = pd.DataFrame(rows)

#%%
summary = results.groupby(["n", "implementation"])[
    ["time", "score", "match_ratio", "n_iter"]
].mean()
print(summary)
