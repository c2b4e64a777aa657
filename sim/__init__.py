"""
sim: simulation core
===================

Modules
-------
geometry
    Segment / polygon intersection and interpolation helpers.
road
    :class:`Road` lane layout and border segments.
sensors
    :class:`Sensors` ray-fan range sensor.
car
    :class:`Car` kinematics, hull and damage assessment.
controls
    Control sources and the :class:`InputQueue` for device events.
tuning
    :class:`VehicleTuning` / :class:`SensorTuning` constants.
world
    :class:`World` per-tick orchestrator.
"""
