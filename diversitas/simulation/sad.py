"""
Species abundance distributions.

A species pool is described by relative abundances drawn from a
lognormal, geometric or even distribution. A simulated community of
n_sim individuals is a multinomial draw from those relative abundances.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

import numpy as np

from diversitas.common import Assemblage, InvalidInput, default_species_names

SAD_TYPES = ("lnorm", "geom", "even")

_DEFAULT_COEFS: Dict[str, Dict[str, float]] = {
    "lnorm": {"cv_abund": 1.0},
    "geom": {"prob": 0.1},
    "even": {},
}


def _coefficients(sad_type: str, sad_coef: Optional[Mapping[str, Any]]) -> Dict[str, float]:
    if sad_type not in SAD_TYPES:
        raise InvalidInput(f"Unknown sad_type: {sad_type}. Must be one of {SAD_TYPES}")
    coefs = dict(_DEFAULT_COEFS[sad_type])
    if sad_coef:
        unknown = set(sad_coef) - set(coefs)
        if unknown:
            raise InvalidInput(
                f"Unknown coefficients for {sad_type}: {sorted(unknown)} "
                f"(expected {sorted(coefs)})"
            )
        coefs.update({k: float(v) for k, v in sad_coef.items()})
    return coefs


def sad_probabilities(
    s_pool: int,
    rng: np.random.Generator,
    sad_type: str = "lnorm",
    sad_coef: Optional[Mapping[str, Any]] = None,
) -> np.ndarray:
    """
    Relative abundances of the species pool, sorted from most to least common.

    Args:
        s_pool: Number of species in the pool
        rng: Random generator (only the lognormal draw uses it)
        sad_type: "lnorm" (coef cv_abund), "geom" (coef prob) or "even"
        sad_coef: Coefficients overriding the defaults

    Returns:
        Probabilities of length s_pool summing to 1
    """
    if s_pool < 1:
        raise InvalidInput(f"s_pool must be at least 1, got {s_pool}")
    coefs = _coefficients(sad_type, sad_coef)

    if sad_type == "lnorm":
        cv = coefs["cv_abund"]
        if cv < 0:
            raise InvalidInput(f"cv_abund must be non-negative, got {cv}")
        sdlog = np.sqrt(np.log1p(cv * cv))
        weights = rng.lognormal(mean=0.0, sigma=sdlog, size=s_pool)
    elif sad_type == "geom":
        prob = coefs["prob"]
        if not 0.0 < prob < 1.0:
            raise InvalidInput(f"prob must lie in (0, 1), got {prob}")
        weights = np.power(1.0 - prob, np.arange(s_pool, dtype=np.float64))
    else:
        weights = np.ones(s_pool)

    weights = np.sort(weights)[::-1]
    return weights / weights.sum()


def sim_sad(
    s_pool: int,
    n_sim: int,
    rng: np.random.Generator,
    sad_type: str = "lnorm",
    sad_coef: Optional[Mapping[str, Any]] = None,
    species: Optional[Sequence[str]] = None,
) -> Assemblage:
    """
    Simulate species abundances of a community of n_sim individuals.

    Species that draw no individuals stay in the assemblage with zero counts.

    Args:
        s_pool: Number of species in the pool
        n_sim: Number of individuals
        rng: Random generator
        sad_type: "lnorm", "geom" or "even"
        sad_coef: Distribution coefficients (cv_abund for lnorm, prob for geom)
        species: Optional species names (default sp1..sp<s_pool>)

    Returns:
        Assemblage whose counts sum to n_sim
    """
    if n_sim < 0:
        raise InvalidInput(f"n_sim must be non-negative, got {n_sim}")
    probabilities = sad_probabilities(s_pool, rng, sad_type=sad_type, sad_coef=sad_coef)
    counts = rng.multinomial(n_sim, probabilities)
    names = tuple(species) if species is not None else default_species_names(s_pool)
    return Assemblage.from_counts(list(counts), species=names)
