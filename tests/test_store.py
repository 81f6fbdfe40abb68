"""Test arena store mutations and snapshot semantics."""
import itertools
import pytest
from planner.errors import PayloadValidationError
from planner.model import (ArenaConfig, ArenaState, Target, TargetAssignment, ThreatLevel)
from planner.payload import SAMPLE_PAYLOAD
from planner.rng import DRNG
from planner.store import ArenaStore


def make_store(**kwargs) -> ArenaStore:
    """Store with a counting id factory and a ticking clock."""
    ids = (f"id-{n}" for n in itertools.count())
    ticks = itertools.count(1000, 1000)
    kwargs.setdefault("clock", lambda: next(ticks))
    return ArenaStore(id_factory=lambda: next(ids), **kwargs)


def test_add_target_defaults():
    """New targets get a sequential label, Medium threat and no squad."""
    store = make_store()
    tid = store.add_target((12, 34))
    t = store.state.find(tid)
    assert t.label == "Target 1"
    assert t.pos == (12.0, 34.0)
    assert t.threat == ThreatLevel.MEDIUM
    assert t.assignment == TargetAssignment.UNASSIGNED
    assert t.last_updated == 1000
    tid2 = store.add_target((1, 1))
    assert store.state.find(tid2).label == "Target 2"


def test_random_placement_respects_margin():
    """Random positions stay 8 m inside the edges."""
    store = make_store(seed=3)
    store.set_config(width=60, height=40)
    for _ in range(50):
        store.add_target()
    for t in store.state.targets:
        assert 8 <= t.x <= 52
        assert 8 <= t.y <= 32


def test_add_target_never_reuses_an_id():
    """A colliding generated id is skipped."""
    existing = Target(id="dup", label="Existing", x=1, y=1)
    ids = iter(["dup", "dup", "fresh"])
    store = ArenaStore(ArenaState(targets=(existing,)), clock=lambda: 0, id_factory=lambda: next(ids))
    assert store.add_target((2, 2)) == "fresh"
    assert len({t.id for t in store.state.targets}) == 2


def test_default_id_factory_is_unique():
    """UUID ids do not repeat."""
    store = ArenaStore(clock=lambda: 0)
    for _ in range(20):
        store.add_target((5, 5))
    assert len({t.id for t in store.state.targets}) == 20


def test_remove_unknown_id_is_noop():
    """Removing a missing id changes nothing and logs nothing."""
    store = make_store()
    store.add_target((1, 1))
    before = store.state
    assert store.remove_target("missing") is False
    assert store.state == before
    assert store.drain_events()[-1].kind == "TargetAdded"


def test_remove_target():
    """Removal keeps the other targets in order."""
    store = make_store()
    a = store.add_target((1, 1))
    b = store.add_target((2, 2))
    assert store.remove_target(a) is True
    assert [t.id for t in store.state.targets] == [b]


def test_update_target_merges_and_refreshes_timestamp():
    """Updates accept enums or their strings and bump the timestamp."""
    store = make_store()
    tid = store.add_target((1, 1))
    stamp = store.state.find(tid).last_updated
    assert store.update_target(tid, label="Relay", threat="Critical",
                               assignment=TargetAssignment.DELTA, x=40) is True
    t = store.state.find(tid)
    assert (t.label, t.x, t.y) == ("Relay", 40.0, 1.0)
    assert t.threat == ThreatLevel.CRITICAL
    assert t.assignment == TargetAssignment.DELTA
    assert t.last_updated > stamp


def test_update_unknown_id_is_noop():
    """Updating a missing id keeps the same snapshot."""
    store = make_store()
    store.add_target((1, 1))
    before = store.state
    assert store.update_target("missing", label="x") is False
    assert store.state is before


def test_update_rejects_immutable_fields():
    """The id cannot be edited."""
    store = make_store()
    tid = store.add_target((1, 1))
    with pytest.raises(ValueError):
        store.update_target(tid, id="other")


def test_mutations_do_not_touch_old_snapshots():
    """Each mutation installs a new snapshot; earlier ones stay intact."""
    store = make_store()
    tid = store.add_target((1, 1))
    old = store.snapshot()
    store.update_target(tid, x=99)
    store.set_config(coverage_radius=40)
    assert old.find(tid).x == 1.0
    assert old.config.coverage_radius == 18.0
    assert store.snapshot() is not old


def test_set_config_merges_without_clamping():
    """Config values outside editor ranges are kept as given."""
    store = make_store()
    cfg = store.set_config(width=500)
    assert cfg == ArenaConfig(width=500.0, height=100.0, coverage_radius=18.0)


def test_replace_all_assigns_fresh_ids():
    """Replaced targets get new ids."""
    store = make_store()
    store.add_target((1, 1))
    store.replace_all([Target(id="keep-me", label="Depot", x=3, y=4, threat=ThreatLevel.HIGH)])
    (t,) = store.state.targets
    assert t.id != "keep-me"
    assert t.label == "Depot"
    assert t.threat == ThreatLevel.HIGH


def test_reset_installs_default_grid_and_keeps_config():
    """Reset brings back the default grid only."""
    store = make_store()
    store.set_config(width=70)
    store.reset()
    assert [t.label for t in store.state.targets] == [
        "Fuel Depot", "Radar Array", "VIP Escort", "Orbital Relay"]
    assert store.state.config.width == 70.0


def test_import_payload_overwrites_config_and_targets():
    """Import replaces config and targets together."""
    store = make_store()
    store.add_target((1, 1))
    store.import_payload(SAMPLE_PAYLOAD)
    assert store.state.config == ArenaConfig(width=120.0, height=120.0, coverage_radius=24.0)
    assert [t.label for t in store.state.targets] == [
        "Command Relay", "Forward Repair", "VIP Convoy", "Ammo Cache"]
    assert store.state.targets[2].threat == ThreatLevel.CRITICAL


def test_import_empty_targets_leaves_state_untouched():
    """An empty target list is rejected before any change."""
    store = make_store()
    store.add_target((1, 1))
    store.drain_events()
    before = store.state
    bad = dict(SAMPLE_PAYLOAD, targets=[])
    with pytest.raises(PayloadValidationError):
        store.import_payload(bad)
    assert store.state is before
    assert store.drain_events() == []


def test_events_are_drained_once():
    """Draining hands events over once."""
    store = make_store()
    store.add_target((1, 1))
    store.set_config(height=50)
    assert [e.kind for e in store.drain_events()] == ["TargetAdded", "ConfigChanged"]
    assert store.drain_events() == []


def test_injected_rng_drives_placement():
    """A supplied generator replaces the seed-built one."""
    a = ArenaStore(clock=lambda: 0, rng=DRNG(11))
    b = ArenaStore(clock=lambda: 0, seed=11)
    a.add_target()
    b.add_target()
    assert a.state.targets[0].pos == b.state.targets[0].pos
