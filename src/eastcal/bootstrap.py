from __future__ import annotations
from eastcal.core.engine import VariantRegistry
from eastcal.engines.specs import ALL_SPECS
from eastcal.engines.factory import make_variant

def build_registry() -> VariantRegistry:
    variants = {}
    for name, spec in ALL_SPECS.items():
        variants[name] = make_variant(spec)
    return VariantRegistry(variants)
