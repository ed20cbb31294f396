"""Prescription values shared by cart lines and order lines."""

from protean.fields import Float, Integer

from ordering.domain import ordering


@ordering.value_object
class EyePower:
    """Prescription for one eye.

    Sphere and cylinder are in dioptres, axis in degrees.
    """

    sphere = Float(min_value=-20.0, max_value=20.0)
    cylinder = Float(min_value=-6.0, max_value=6.0)
    axis = Integer(min_value=0, max_value=180)


def eye_power_from(data):
    """Build an EyePower from a plain dict, or None when nothing was supplied."""
    if not data:
        return None
    return EyePower(
        sphere=data.get("sphere"),
        cylinder=data.get("cylinder"),
        axis=data.get("axis"),
    )


def eye_power_to_dict(power):
    if power is None:
        return None
    return {"sphere": power.sphere, "cylinder": power.cylinder, "axis": power.axis}
