"""
The CONTROLLER layer drives the model: the animation timer, and the bridge to
the external physics tutor (with its worker thread).
"""
