"""Route modules attached to the dashboard Blueprint."""

# Load the Blueprint first so route modules can be imported directly without
# hitting the dashboard <-> routes circular import mid-initialisation.
import lalitha.api.dashboard  # noqa: E402,F401
