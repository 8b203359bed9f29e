"""
Numeric libraries used by the analytical services.

- protoform: trapezoid membership functions and sigma-count quantifier affirmation
- trend: least-squares linear models, centred moving average, additive decomposition

Both modules are pure: no I/O, no shared state, no dependency on the service layer.
"""

from summarization.libs.protoform import (
    MembershipFunction,
    trapmf,
    trapmf_l,
    trapmf_r,
    trapezoid,
    sigma_count_qa,
)
from summarization.libs.trend import (
    create_linear_model,
    centered_moving_average,
    additive_decompose,
)


__all__ = [
    'MembershipFunction',
    'trapmf',
    'trapmf_l',
    'trapmf_r',
    'trapezoid',
    'sigma_count_qa',
    'create_linear_model',
    'centered_moving_average',
    'additive_decompose',
]
