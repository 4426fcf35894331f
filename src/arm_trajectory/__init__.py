"""Execute arm trajectory goals: validate, dispatch waypoints, and monitor to completion."""
