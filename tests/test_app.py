import pytest

from reefflock.app import Settings, Simulation, main
from reefflock.boid import BoidKind


@pytest.fixture
def simulation():
    return Simulation(seed=7)


def test_settings_defaults():
    settings = Settings()
    assert settings.amplitude == 2.5
    assert settings.prey_max_speed == 0.25
    assert settings.predator_vision_radius == 60.0
    assert settings.show_health is True


def test_initial_population(simulation):
    assert len(simulation.flock.boids) == 10
    assert len(simulation.predators.boids) == 10
    assert len(simulation.food.boids) == 10
    assert all(b.kind is BoidKind.PREDATOR for b in simulation.predators.boids)
    assert all(b.kind is BoidKind.FOOD for b in simulation.food.boids)


def test_seed_is_reproducible():
    first = Simulation(seed=3)
    second = Simulation(seed=3)
    assert [b.position for b in first.flock.boids] == [b.position for b in second.flock.boids]


def test_params_mirror_settings():
    settings = Settings(prey_max_speed=0.7, cohesion_radius=12.0)
    params = Simulation(settings, seed=1).params()
    assert params.prey_max_speed == 0.7
    assert params.cohesion_radius == 12.0
    assert params.predator_max_force == settings.predator_max_force


def test_features_mirror_settings():
    features = Simulation(Settings(show_health=False), seed=1).features()
    assert features.show_health is False
    assert features.enable_collision_rays is True


def test_update_pushes_params(simulation):
    simulation.update()
    assert all(b.max_speed == 0.25 for b in simulation.flock.boids)
    assert all(b.max_speed == 0.5 for b in simulation.predators.boids)
    assert all(b.max_speed == 0.0 for b in simulation.food.boids)


def test_update_rebuilds_terrain_on_change(simulation):
    before = simulation.terrain
    simulation.update()
    assert simulation.terrain is before
    simulation.settings.amplitude = 0.0
    simulation.update()
    assert all(h == 0.0 for row in simulation.height_map for h in row)


def test_key_pressed_spawns(simulation):
    flock = simulation.key_pressed("f")
    assert flock is simulation.food
    assert len(simulation.food.boids) == 20
    simulation.key_pressed("p")
    assert len(simulation.predators.boids) == 20
    simulation.key_pressed("b")
    assert len(simulation.flock.boids) == 20


def test_unknown_key_changes_nothing(simulation):
    assert simulation.key_pressed("x") is None
    assert simulation.counts() == {"prey": 10, "predators": 10, "food": 10}


def test_steps_never_grow_population(simulation):
    for _ in range(5):
        simulation.update()
        simulation.step()
    counts = simulation.counts()
    assert all(0 <= count <= 10 for count in counts.values())


def test_main_prints_summary(capsys):
    assert main(["--steps", "2", "--seed", "1", "--report-every", "1"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("frame 1: prey=")
    assert "predators=" in lines[-1]


def test_main_rejects_negative_steps():
    with pytest.raises(SystemExit):
        main(["--steps", "-1"])