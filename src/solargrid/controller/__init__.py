"""
The CONTROLLER layer holds the Qt glue around the model: the frame clock that
drives the animation, background workers and device gates.
It never draws anything.
"""
