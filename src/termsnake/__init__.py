"""Terminal Snake: fixed-timestep simulation with a curses front end."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
