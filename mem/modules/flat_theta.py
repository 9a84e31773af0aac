"""
Flat transfer function on theta (mainly for testing purposes).

The transfer function on the particle's polar angle is the constant 1,
over the range [0, pi]. Integrating over the reconstructed particle's
momenta then gives phase-space volumes and cross-sections, which is
how the phase-space generators are validated.

The module still takes a four-momentum as input, since it needs an
energy, a phi angle and a momentum magnitude.

Integration dimension: 1

Inputs:
    ps_point          float        phase-space point in [0, 1]
    reco_particle     FourVector   experimentally reconstructed particle

Outputs:
    output            FourVector   generated particle, differing from
                                   reco_particle only by its theta
    TF_times_jacobian float        transfer function (1) times the jacobian
                                   of [0, 1] -> [0, pi]
"""
import logging
import math
from typing import NamedTuple

from ..kinematics import FourVector
from .base import Module, Status


logger = logging.getLogger(__name__)


class ThetaTransfer(NamedTuple):
    output: FourVector
    TF_times_jacobian: float


def flat_transfer_function_on_theta(ps_point: float, reco_particle: FourVector) -> ThetaTransfer:
    """
    Replace the polar angle of reco_particle by pi * ps_point.

    ps_point is used as given: values outside [0, 1] are not clamped.
    """
    new_theta = math.pi * ps_point

    # keep |p|, phi and E of the input
    output = FourVector.from_spherical(
        reco_particle.E,
        reco_particle.magnitude,
        new_theta,
        reco_particle.phi,
    )
    return ThetaTransfer(output, math.pi)


class FlatTransferFunctionOnTheta(Module):

    def __init__(self, pool, parameters):
        super().__init__(pool, parameters.module_name)

        self.ps_point = parameters.get("ps_point")
        self.ps_point.resolve(pool)

        self.reco_particle = parameters.get("reco_particle")
        self.reco_particle.resolve(pool)

        self.output = self.produce("output")
        self.TF_times_jacobian = self.produce("TF_times_jacobian")

        logger.debug(f"{self.name}: ps_point={self.ps_point}, reco_particle={self.reco_particle}")

    def work(self) -> Status:
        result = flat_transfer_function_on_theta(self.ps_point.get(), self.reco_particle.get())
        self.set_output(self.output, result.output)
        self.set_output(self.TF_times_jacobian, result.TF_times_jacobian)
        return Status.OK

    def dimensions(self) -> int:
        return 1
