"""
Host interface: input tags, parameter sets, pool, registry and YAML config.
"""
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from mem.kinematics import FourVector
from mem.modules import (
    FlatTransferFunctionOnTheta,
    Module,
    Status,
    build_modules,
    create_module,
    get_module_class,
    list_registered_modules,
    register,
)
from mem.modules import registry
from mem.parameters import InputTag, ParameterSet, load_config, parameter_sets
from mem.pool import Pool

CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "flat_theta.yaml"


# ------------------------------ InputTag ----------------------------------
def test_input_tag_parsing():
    tag = InputTag.from_string("cuba::ps_points/3")
    assert (tag.module, tag.parameter, tag.index) == ("cuba", "ps_points", 3)
    assert str(tag) == "cuba::ps_points/3"

    tag = InputTag.from_string("input::particles")
    assert tag.index is None
    assert str(tag) == "input::particles"


@pytest.mark.parametrize("text", ["cuba", "cuba::", "::x", "a::b/c", "a::b::c", 42])
def test_input_tag_invalid(text):
    assert not InputTag.is_input_tag(text)
    with pytest.raises(ValueError):
        InputTag.from_string(text)


def test_input_tag_get_before_resolve():
    with pytest.raises(RuntimeError):
        InputTag.from_string("cuba::ps_points/0").get()


def test_input_tag_resolve_and_get():
    pool = Pool()
    pool.put("cuba", "ps_points", [0.1, 0.2])
    pool.put("met", "value", 7.5)

    indexed = InputTag.from_string("cuba::ps_points/1")
    indexed.resolve(pool)
    assert indexed.resolved
    assert indexed.get() == 0.2

    plain = InputTag.from_string("met::value")
    plain.resolve(pool)
    assert plain.get() == 7.5

    # values are read at call time, not at resolve time
    pool.put("cuba", "ps_points", [0.3, 0.4])
    assert indexed.get() == 0.4


def test_input_tag_unknown_slot_raises_on_get():
    pool = Pool()
    tag = InputTag.from_string("nobody::nothing")
    tag.resolve(pool)
    with pytest.raises(KeyError):
        tag.get()

    # slot declared after binding
    pool.put("nobody", "nothing", 3.0)
    assert tag.get() == 3.0


# ---------------------------- ParameterSet --------------------------------
def test_parameter_set_get():
    params = ParameterSet("T", "name", {"tag": "a::b/0", "value": 3.0, "text": "hello"})
    assert isinstance(params.get("tag"), InputTag)
    assert params.get("value") == 3.0
    assert params.get("text") == "hello"
    assert params.get("missing", None) is None
    assert params.exists("value") and not params.exists("missing")
    with pytest.raises(KeyError):
        params.get("missing")


# -------------------------------- Pool ------------------------------------
def test_pool_produce_twice_raises():
    pool = Pool()
    pool.produce("m", "out")
    with pytest.raises(ValueError):
        pool.produce("m", "out")


def test_pool_get_missing_raises():
    with pytest.raises(KeyError):
        Pool().get("m", "out")


def test_pool_slots():
    pool = Pool()
    pool.put("cuba", "ps_points", [])
    pool.produce("m", "out", initial=1.0)
    assert pool.slots() == ["cuba::ps_points", "m::out"]
    assert pool.get("m", "out") == 1.0


# ------------------------------ Registry ----------------------------------
def test_registry_lookup():
    assert get_module_class("FlatTransferFunctionOnTheta") is FlatTransferFunctionOnTheta
    assert list_registered_modules()["FlatTransferFunctionOnTheta"] == "FlatTransferFunctionOnTheta"


def test_registry_unknown_type():
    with pytest.raises(KeyError):
        get_module_class("DoesNotExist")


def test_register_custom_module(monkeypatch):
    monkeypatch.setattr(registry, "_REGISTRY", dict(registry._REGISTRY))

    class Constant(Module):
        def __init__(self, pool, parameters):
            super().__init__(pool, parameters.module_name)
            self.value = self.produce("value")

        def work(self):
            self.set_output(self.value, 1.0)
            return Status.OK

    register("Constant", Constant)
    pool = Pool()
    module = create_module(ParameterSet("Constant", "c", {}), pool)
    assert module.dimensions() == 0
    assert module.work() == Status.OK
    assert pool.get("c", "value") == 1.0


# ------------------------------- Config -----------------------------------
def test_load_shipped_config():
    config = load_config(CONFIG_PATH)
    sets = list(parameter_sets(config))
    assert len(sets) == 1
    assert sets[0].module_type == "FlatTransferFunctionOnTheta"
    assert str(sets[0].get("ps_point")) == "cuba::ps_points/0"


def test_parameter_sets_requires_type_and_name():
    with pytest.raises(ValueError):
        list(parameter_sets({"modules": [{"name": "x"}]}))


def test_build_modules_from_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "modules:\n"
        "  - type: FlatTransferFunctionOnTheta\n"
        "    name: tf_lepton\n"
        "    parameters:\n"
        "      ps_point: cuba::ps_points/1\n"
        "      reco_particle: input::particles/0\n"
    )
    pool = Pool()
    pool.put("cuba", "ps_points", [0.9, 0.0])
    pool.put("input", "particles", [FourVector(10.0, 0.0, 3.0, 4.0)])

    modules = build_modules(load_config(path), pool)
    assert [m.name for m in modules] == ["tf_lepton"]
    assert modules[0].work() == Status.OK
    assert pool.get("tf_lepton", "output").pz == pytest.approx(5.0)


def test_empty_config():
    assert build_modules({}, Pool()) == []


def test_build_modules_consumer_before_producer(monkeypatch):
    monkeypatch.setattr(registry, "_REGISTRY", dict(registry._REGISTRY))

    class EnergyReader(Module):
        def __init__(self, pool, parameters):
            super().__init__(pool, parameters.module_name)
            self.particle = parameters.get("particle")
            self.particle.resolve(pool)
            self.energy = self.produce("energy")

        def work(self):
            self.set_output(self.energy, self.particle.get().E)
            return Status.OK

    register("EnergyReader", EnergyReader)
    config = {
        "modules": [
            {"type": "EnergyReader", "name": "reader", "parameters": {"particle": "flatTF::output"}},
            {
                "type": "FlatTransferFunctionOnTheta",
                "name": "flatTF",
                "parameters": {"ps_point": "cuba::ps_points/0", "reco_particle": "input::particles/0"},
            },
        ]
    }
    pool = Pool()
    pool.put("cuba", "ps_points", [0.25])
    pool.put("input", "particles", [FourVector(10.0, 0.0, 3.0, 4.0)])

    reader, flat = build_modules(config, pool)
    assert flat.work() == Status.OK
    assert reader.work() == Status.OK
    assert pool.get("reader", "energy") == 10.0
