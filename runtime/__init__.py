from __future__ import annotations

from .particles_v1 import Particle, ParticlePoolV1
from .vector_fields_v1 import FlowFieldConfig, FlowFieldV1
from .noise_v2 import Noise3D, Noise3DConfig

from .integrators_v1 import clamp_speed, step_particle, wrap_edges

# Echo / spawn cadence primitive
from .echoes_v1 import EchoCompositorV1, EchoEvent, SpawnCadenceV1

# Drawing surface primitive
from .surface_v1 import DrawingSurface, RasterSurfaceV1, overlay_hex, parse_color
