import pytest

from monsters.application import (
    Application,
    ApplicationSpecification,
    Layer,
    run_application,
)
from monsters.input import Input


class StepClock:
    def __init__(self, step):
        self.step = step
        self.calls = 0

    def __call__(self):
        value = self.calls * self.step
        self.calls += 1
        return value


class Recorder(Layer):
    def __init__(self, log, name="layer"):
        self.log = log
        self.name = name
        self.timesteps = []

    def on_attach(self):
        self.log.append((self.name, "attach"))

    def on_detach(self):
        self.log.append((self.name, "detach"))

    def on_update(self, timestep):
        self.timesteps.append(timestep)
        self.log.append((self.name, "update"))

    def on_ui_render(self):
        self.log.append((self.name, "render"))


def test_specification_defaults():
    spec = ApplicationSpecification()
    assert (spec.name, spec.width, spec.height) == ("Walnut App", 1600, 900)


def test_push_layer_attaches():
    log = []
    app = Application(clock=StepClock(0.01))
    layer = app.push_layer(Recorder(log))
    assert log == [("layer", "attach")]
    assert app.layers == (layer,)


def test_push_layer_class_instantiates():
    app = Application(clock=StepClock(0.01))
    layer = app.push_layer(Layer)
    assert isinstance(layer, Layer)
    assert len(app.layers) == 1


def test_push_non_layer_rejected():
    app = Application(clock=StepClock(0.01))
    with pytest.raises(TypeError):
        app.push_layer(object())
    with pytest.raises(TypeError):
        app.push_layer(int)


def test_run_counts_frames_and_timesteps():
    log = []
    app = Application(clock=StepClock(0.01))
    layer = app.push_layer(Recorder(log))
    assert app.run(max_frames=3) == 3
    assert layer.timesteps[0] == 0.0
    assert layer.timesteps[1:] == [pytest.approx(0.01), pytest.approx(0.01)]
    assert app.running is False


def test_timestep_is_clamped():
    app = Application(clock=StepClock(1.0))
    layer = app.push_layer(Recorder([]))
    app.run(max_frames=2)
    assert layer.timesteps[1] == pytest.approx(0.0333)
    assert app.frame_time == pytest.approx(1.0)


def test_update_then_render_order_and_menubar():
    log = []
    app = Application(clock=StepClock(0.01))
    app.push_layer(Recorder(log, "a"))
    app.push_layer(Recorder(log, "b"))
    app.set_menubar_callback(lambda: log.append(("menu", "bar")))
    log.clear()
    app.run(max_frames=1)
    assert log == [
        ("a", "update"),
        ("b", "update"),
        ("menu", "bar"),
        ("a", "render"),
        ("b", "render"),
    ]


def test_close_stops_loop():
    app = Application(clock=StepClock(0.01))

    class Closer(Layer):
        def __init__(self):
            self.updates = 0

        def on_update(self, timestep):
            self.updates += 1
            if self.updates == 2:
                app.close()

    closer = app.push_layer(Closer())
    assert app.run(max_frames=10) == 2
    assert closer.updates == 2


def test_resource_free_runs_after_frames_in_flight():
    app = Application(clock=StepClock(0.01))
    freed = []
    app.submit_resource_free(lambda: freed.append("x"))
    assert app.pending_resources == 1
    app.run(max_frames=1)
    assert freed == []
    app.run(max_frames=1)
    assert freed == ["x"]
    assert app.pending_resources == 0


def test_shutdown_detaches_and_flushes():
    log = []
    app = Application(clock=StepClock(0.01))
    app.push_layer(Recorder(log, "a"))
    app.push_layer(Recorder(log, "b"))
    freed = []
    app.submit_resource_free(lambda: freed.append(1))
    log.clear()
    app.shutdown()
    assert log == [("a", "detach"), ("b", "detach")]
    assert freed == [1]
    assert app.layers == ()
    with pytest.raises(RuntimeError):
        app.run(max_frames=1)


def test_time_relative_to_start():
    app = Application(clock=StepClock(0.5))
    assert app.time() == pytest.approx(0.5)


def test_input_state_is_kept():
    state = Input()
    app = Application(input_state=state, clock=StepClock(0.01))
    assert app.input is state


def test_run_application_runs_and_shuts_down():
    log = []
    seen = []

    def factory(argv):
        seen.append(argv)
        app = Application(clock=StepClock(0.01))

        class Once(Recorder):
            def on_update(self, timestep):
                super().on_update(timestep)
                app.close()

        app.push_layer(Once(log))
        return app

    assert run_application(factory, ["prog"]) == 0
    assert seen == [["prog"]]
    assert log == [
        ("layer", "attach"),
        ("layer", "update"),
        ("layer", "render"),
        ("layer", "detach"),
    ]