"""
Community simulation.

Species abundance distributions, spatial point-pattern communities and
quadrat sampling. All randomness comes from an explicitly passed
numpy Generator.
"""

from .community import Community, sim_poisson_community, sim_thomas_community
from .sad import SAD_TYPES, sad_probabilities, sim_sad
from .sampling import SAMPLING_METHODS, sample_quadrats

__all__ = [
    'Community',
    'SAD_TYPES',
    'SAMPLING_METHODS',
    'sad_probabilities',
    'sample_quadrats',
    'sim_poisson_community',
    'sim_sad',
    'sim_thomas_community',
]
