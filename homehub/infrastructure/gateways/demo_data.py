"""
Demo universe data.

Records use the same shapes as the real backends (CLIP v2 resources for the
lighting bridge). Demo gateways deep-copy these on creation and on reset, so
the module level data is never mutated.
"""

DEMO_BRIDGE_IP = "demo-bridge"
DEMO_APP_KEY = "demo-app-key"
DEMO_ACCESS_TOKEN = "demo-access-token"


def _light(light_id, name, on, brightness, xy=None, mirek=None):
    light = {
        "id": light_id,
        "type": "light",
        "on": {"on": on},
        "dimming": {"brightness": brightness},
        "metadata": {"name": name},
    }
    if xy:
        light["color"] = {"xy": {"x": xy[0], "y": xy[1]}}
    if mirek:
        light["color_temperature"] = {"mirek": mirek}
    return light


def _children(rtype, *ids):
    return [{"rid": rid, "rtype": rtype} for rid in ids]


HUE_LIGHTS = [
    _light("light-1", "Floor Lamp", True, 100, xy=(0.6915, 0.3083)),
    _light("light-2", "TV Backlight", True, 75, xy=(0.1532, 0.0475)),
    _light("light-3", "Plant Light", True, 50, xy=(0.17, 0.7)),
    _light("light-4", "Corner Lamp", True, 25, xy=(0.5016, 0.4152)),
    _light("light-5", "Ceiling", False, 0, xy=(0.3227, 0.329)),
    _light("light-6", "Kitchen Ceiling", True, 90, mirek=153),
    _light("light-7", "Counter", True, 60, mirek=250),
    _light("light-8", "Under Cabinet", True, 40, mirek=400),
    _light("light-9", "Bedroom Ceiling", True, 80, xy=(0.5614, 0.4156)),
    _light("light-10", "Bedside Left", True, 45, xy=(0.2731, 0.1601)),
    _light("light-11", "Bedside Right", False, 0, xy=(0.3227, 0.329)),
    _light("light-12", "Reading", True, 15, xy=(0.1532, 0.0475)),
]

HUE_DEVICES = [
    {"id": "device-1", "services": _children("light", "light-1", "light-2", "light-3")},
    {"id": "device-2", "services": _children("light", "light-4", "light-5")},
    {"id": "device-3", "services": _children("light", "light-6", "light-7", "light-8")},
    {"id": "device-4", "services": _children("light", "light-9", "light-10", "light-11")},
]

HUE_ROOMS = [
    {
        "id": "room-1",
        "type": "room",
        "metadata": {"name": "Living Room"},
        "children": _children("device", "device-1", "device-2"),
    },
    {
        "id": "room-2",
        "type": "room",
        "metadata": {"name": "Kitchen"},
        "children": _children("device", "device-3"),
    },
    {
        "id": "room-3",
        "type": "room",
        "metadata": {"name": "Bedroom"},
        "children": _children("device", "device-4") + _children("light", "light-12"),
    },
]

HUE_ZONES = [
    {
        "id": "zone-1",
        "type": "zone",
        "metadata": {"name": "Downstairs"},
        "children": _children("light", "light-1", "light-6", "light-5"),
    },
    {
        "id": "zone-2",
        "type": "zone",
        "metadata": {"name": "Upstairs"},
        "children": _children("light", "light-9", "light-10", "light-11"),
    },
]


def _scene(scene_id, name, group_id, group_type="room"):
    return {
        "id": scene_id,
        "type": "scene",
        "metadata": {"name": name},
        "group": {"rid": group_id, "rtype": group_type},
    }


HUE_SCENES = [
    _scene("scene-1", "Bright", "room-1"),
    _scene("scene-2", "Relax", "room-1"),
    _scene("scene-3", "Movie", "room-1"),
    _scene("scene-4", "Concentrate", "room-2"),
    _scene("scene-5", "Cooking", "room-2"),
    _scene("scene-6", "Nightlight", "room-3"),
    _scene("scene-7", "Relax", "room-3"),
    _scene("scene-8", "Evening", "zone-1", "zone"),
]

# Scene actions applied by the demo bridge on activation
HUE_SCENE_ACTIONS = {
    "scene-1": {"on": True, "brightness": 100},
    "scene-2": {"on": True, "brightness": 40},
    "scene-3": {"on": True, "brightness": 10},
    "scene-4": {"on": True, "brightness": 100},
    "scene-5": {"on": True, "brightness": 80},
    "scene-6": {"on": True, "brightness": 5},
    "scene-7": {"on": True, "brightness": 40},
    "scene-8": {"on": True, "brightness": 30},
}


def _motion_behavior(behavior_id, name, area_id):
    return {
        "id": behavior_id,
        "type": "behavior_instance",
        "enabled": True,
        "metadata": {"name": name},
        "configuration": {
            "motion": {
                "motion_service": {"rid": area_id, "rtype": "convenience_area_motion"}
            }
        },
    }


def _motion_area(area_id, motion=False):
    return {
        "id": area_id,
        "type": "convenience_area_motion",
        "enabled": True,
        "motion": {
            "motion": motion,
            "motion_valid": True,
            "motion_report": {"changed": "2024-01-01T00:00:00.000Z", "motion": motion},
        },
    }


HUE_RESOURCES = {
    "behavior_instance": [
        _motion_behavior("behavior-1", "Living Room", "area-1"),
        _motion_behavior("behavior-2", "Kitchen", "area-2"),
        _motion_behavior("behavior-3", "Hallway", "area-3"),
    ],
    "convenience_area_motion": [
        _motion_area("area-1"),
        _motion_area("area-2"),
        _motion_area("area-3", motion=True),
    ],
}

HIVE_STATUS = {
    "heating": {
        "id": "demo-heating",
        "name": "Central Heating",
        "currentTemperature": 19.5,
        "targetTemperature": 21.0,
        "isHeating": True,
        "mode": "schedule",
    },
    "hotWater": {
        "id": "demo-hot-water",
        "name": "Hot Water",
        "isOn": False,
        "mode": "schedule",
    },
}

SPOTIFY_DEVICES = [
    {
        "id": "demo-speaker-1",
        "name": "Living Room Speaker",
        "type": "Speaker",
        "isActive": True,
        "volumePercent": 40,
    },
    {
        "id": "demo-speaker-2",
        "name": "Kitchen Speaker",
        "type": "Speaker",
        "isActive": False,
        "volumePercent": 25,
    },
]

SPOTIFY_PLAYBACK = {
    "isPlaying": True,
    "track": {"id": "demo-track-1", "name": "Demo Track", "artist": "Demo Artist"},
    "device": {"id": "demo-speaker-1", "name": "Living Room Speaker"},
}
