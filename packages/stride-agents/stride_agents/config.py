"""Tuning values for monster actions and sensing."""
from __future__ import annotations

from dataclasses import dataclass, field

from stride_steer.behaviors import AlignConfig, ArriveConfig
from stride_steer.wander import WanderConfig


@dataclass(frozen=True)
class MonsterConfig:
    """Options shared by every monster a dispatcher drives.

    Attributes:
        catch_distance: The player counts as caught closer than this.
        dance_radius: Radius of the dance ring around the dance anchor.
        dance_points: Number of waypoints on the dance ring.
        dance_duration: Upper bound on one dance, in seconds.
        wander_speed: Speed cap while wandering.
        flee_speed: Fixed speed while fleeing.
        arrive: Linear steering for path and dance waypoints.
        align: Angular steering toward the current waypoint.
        wander: Circle projection used by the Wander action.
        waypoint_threshold: Distance at which a waypoint counts as reached.
        close_range: The player is always seen inside this distance.
        sight_range: The player is never seen beyond this distance.
        sight_cone: Half-angle of the view cone in degrees.
        dance_cooldown: Seconds between dances.
        dance_chance: Per-frame chance to dance once the cooldown is over.
        feature_probe: Probe radius of the recorded near-obstacle feature.
    """

    catch_distance: float = 30.0
    dance_radius: float = 30.0
    dance_points: int = 12
    dance_duration: float = 5.0
    wander_speed: float = 50.0
    flee_speed: float = 200.0
    arrive: ArriveConfig = field(
        default_factory=lambda: ArriveConfig(
            max_acceleration=150.0, max_speed=120.0,
            target_radius=15.0, slow_radius=80.0, time_to_target=0.1,
        )
    )
    align: AlignConfig = field(
        default_factory=lambda: AlignConfig(
            max_angular_acceleration=20.0, max_rotation=180.0,
            target_radius=1.0, slow_radius=30.0, time_to_target=0.1,
        )
    )
    wander: WanderConfig = field(default_factory=WanderConfig)
    waypoint_threshold: float = 15.0
    close_range: float = 30.0
    sight_range: float = 250.0
    sight_cone: float = 70.0
    dance_cooldown: float = 10.0
    dance_chance: float = 0.05
    feature_probe: float = 50.0

    def __post_init__(self) -> None:
        if self.catch_distance <= 0:
            raise ValueError("catch_distance must be positive")
        if self.dance_points < 1:
            raise ValueError("dance_points must be at least 1")
        if self.dance_duration <= 0:
            raise ValueError("dance_duration must be positive")
        if self.waypoint_threshold <= 0:
            raise ValueError("waypoint_threshold must be positive")
        if not 0.0 <= self.dance_chance <= 1.0:
            raise ValueError(f"dance_chance must be in [0, 1], got {self.dance_chance}")
