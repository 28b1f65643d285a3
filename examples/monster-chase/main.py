"""
stride Monster Chase
Two monsters hunt the player through a four-room level. The red one runs a
behavior tree; the blue one stands idle until it learns a decision tree from
the red one's recorded trace.
"""

import logging
import random
import sys
from dataclasses import dataclass

import pygame

from stride import Engine
from stride_agents import (
    MONSTER_TREE,
    ActionDispatcher,
    Agent,
    DecisionPolicy,
    Monster,
    Navigation,
    Recorded,
    Target,
    build_character_tree,
    build_monster_tree,
    learn_policy,
    make_monster_system,
    make_recorder_system,
    parse_pathfind_label,
    reset_monster,
    spawn_monster,
)
from stride_bt import BehaviorManager, BehaviorTree, make_bt_system
from stride_decide import MONSTER_COLUMNS, EnvironmentState, TraceRecorder, save_tree
from stride_nav import Dijkstra, Environment, GridCompiler, PathFollower, Rect
from stride_steer import Kinematic, vec

# --- Configuration ---
WIDTH, HEIGHT = 640, 480
FPS = 60
TITLE = "stride Monster Chase"
CELL_SIZE = 20.0

PLAYER_START = (100.0, 100.0)
HUNTER_START = (400.0, 400.0)
LEARNER_START = (450.0, 140.0)
DECISION_INTERVAL = 2.0
TRACE_FILE = "monster_trace.csv"
TREE_FILE = "monster_tree.txt"

# Colors
BG_COLOR = (26, 26, 46)
ROOM_COLOR = (44, 44, 70)
WALL_COLOR = (120, 120, 150)
HUD_COLOR = (200, 200, 220)
PLAYER_COLOR = (0, 255, 100)
PATH_COLOR = (255, 215, 0)
HUNTER_COLOR = (255, 80, 80)
LEARNER_COLOR = (100, 160, 255)

# Which monsters hunt: both, red only, blue only.
SHOW_MODES = ("both", "red", "blue")


# --- Demo components (not part of stride, just for the player and rendering) ---
@dataclass
class Visual:
    color: tuple[int, int, int]
    radius: float


@dataclass
class Player:
    follower: PathFollower
    state: EnvironmentState
    autopilot: bool = False
    decision_timer: float = 0.0


def build_level() -> Environment:
    env = Environment(WIDTH, HEIGHT)
    env.add_room(Rect(0, 0, 320, 240))
    env.add_room(Rect(320, 0, 320, 240))
    env.add_room(Rect(0, 240, 320, 240))
    env.add_room(Rect(320, 240, 320, 240))

    # Walls between rooms, leaving one doorway per shared side.
    env.add_obstacle(Rect(310, 0, 20, 100))
    env.add_obstacle(Rect(310, 160, 20, 180))
    env.add_obstacle(Rect(310, 400, 20, 80))
    env.add_obstacle(Rect(0, 230, 120, 20))
    env.add_obstacle(Rect(180, 230, 130, 20))
    env.add_obstacle(Rect(330, 230, 130, 20))
    env.add_obstacle(Rect(520, 230, 120, 20))

    # Furniture.
    env.add_obstacle(Rect(180, 60, 40, 60))
    env.add_obstacle(Rect(420, 300, 60, 30))
    env.add_obstacle(Rect(80, 380, 80, 20))
    return env


def plan_route(nav: Navigation, start, goal) -> list:
    source = nav.compiler.point_to_vertex(start)
    target = nav.compiler.point_to_vertex(goal)
    vertices = Dijkstra().find_path(nav.graph, source, target)
    route = [nav.compiler.vertex_to_point(v) for v in vertices]
    if route and nav.environment.is_walkable(goal):
        route[-1] = goal
    return route


def make_player_system(nav: Navigation, character_tree):
    """Moves the player along its route; on autopilot it picks rooms itself."""

    def player_system(world, ctx) -> None:
        for _, (player, kin) in list(world.query(Player, Kinematic)):
            player.state.update(ctx.dt)
            if player.autopilot:
                player.decision_timer -= ctx.dt
                if player.decision_timer <= 0.0:
                    player.decision_timer = DECISION_INTERVAL
                    steer_player(nav, player, kin, character_tree.make_decision(), ctx.random)
            player.follower.update(ctx.dt)
            if player.follower.is_complete:
                kin.velocity = (0.0, 0.0)
                kin.rotation = 0.0

    return player_system


def steer_player(nav: Navigation, player: Player, kin: Kinematic, label: str, rng) -> None:
    goal = parse_pathfind_label(label)
    if goal is None and label == "Wander":
        goal = random_walkable_point(nav.environment, rng)
    if goal is None:
        player.follower.clear()
        return
    player.state.set_target(goal)
    player.state.reset_state_timer()
    player.follower.set_path(plan_route(nav, kin.position, goal))


def random_walkable_point(env: Environment, rng) -> tuple[float, float]:
    while True:
        point = (rng.uniform(0, WIDTH), rng.uniform(0, HEIGHT))
        if env.is_walkable(point):
            return point


def apply_show_mode(world, mode: str, hunter: int, learner: int, player: int) -> None:
    for eid, name in ((hunter, "red"), (learner, "blue")):
        if mode in ("both", name):
            world.attach(eid, Target(player))
        else:
            world.detach(eid, Target)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption(TITLE)
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 14)

    env = build_level()
    compiler = GridCompiler(env, CELL_SIZE)
    nav = Navigation(env, compiler.compile(), compiler)

    engine = Engine()
    world = engine.world

    player_kin = Kinematic(position=PLAYER_START)
    player_state = EnvironmentState(player_kin, env)
    character_tree = build_character_tree(player_state, rng=random.Random(engine.seed))
    player_eid = world.spawn(
        player_kin,
        Player(PathFollower(player_kin), player_state),
        Visual(PLAYER_COLOR, 8.0),
    )

    manager = BehaviorManager()
    dispatcher = ActionDispatcher()
    build_monster_tree(manager, dispatcher)
    hunter = spawn_monster(
        world, HUNTER_START, nav, player_eid, random.Random(engine.seed + 1),
        BehaviorTree(tree_name=MONSTER_TREE), Visual(HUNTER_COLOR, 9.0),
    )
    learner = spawn_monster(
        world, LEARNER_START, nav, player_eid, random.Random(engine.seed + 2),
        Visual(LEARNER_COLOR, 9.0),
    )

    catches = {hunter: 0, learner: 0}

    def on_caught(w, ctx, eid) -> None:
        catches[eid] += 1
        reset_monster(w, eid)

    recorder = TraceRecorder()
    engine.add_system(make_player_system(nav, character_tree))
    engine.add_system(make_bt_system(manager))
    engine.add_system(make_monster_system(dispatcher, on_caught))
    engine.add_system(make_recorder_system(recorder, dispatcher.config))

    show_mode = 0
    status = "Click to move. A toggles autopilot."

    running = True
    while running:
        frame_dt = clock.tick(FPS) / 1000.0
        player = world.get(player_eid, Player)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_r:
                    player_kin.position = PLAYER_START
                    player_kin.velocity = (0.0, 0.0)
                    player.follower.clear()
                    reset_monster(world, hunter)
                    reset_monster(world, learner)
                    catches.update(dict.fromkeys(catches, 0))
                    status = "Positions and catches reset"
                elif event.key == pygame.K_1:
                    if world.has(hunter, Recorded):
                        world.detach(hunter, Recorded)
                        recorder.write(TRACE_FILE)
                        status = f"Recording stopped: {recorder.frames} frames"
                    else:
                        recorder.clear()
                        world.attach(hunter, Recorded())
                        status = "Recording the red monster..."
                elif event.key == pygame.K_2:
                    learned = learn_policy(TRACE_FILE, config=dispatcher.config)
                    if learned is None:
                        status = "Nothing to learn yet; press 1 to record"
                    else:
                        save_tree(TREE_FILE, learned.root, MONSTER_COLUMNS, learned.policy)
                        world.attach(learner, DecisionPolicy(learned))
                        reset_monster(world, learner)
                        status = "Blue monster learned a decision tree"
                elif event.key == pygame.K_3:
                    show_mode = (show_mode + 1) % len(SHOW_MODES)
                    apply_show_mode(world, SHOW_MODES[show_mode], hunter, learner, player_eid)
                    status = f"Hunting: {SHOW_MODES[show_mode]}"
                elif event.key == pygame.K_a:
                    player.autopilot = not player.autopilot
                    player.decision_timer = 0.0
                    status = "Autopilot on" if player.autopilot else "Autopilot off"
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                goal = (float(event.pos[0]), float(event.pos[1]))
                if env.is_walkable(goal):
                    player.autopilot = False
                    player.follower.set_path(plan_route(nav, player_kin.position, goal))

        engine.step(frame_dt)

        # --- Draw ---
        screen.fill(BG_COLOR)
        for room in env.rooms:
            pygame.draw.rect(screen, ROOM_COLOR, (room.left, room.top, room.width, room.height))
        for wall in env.obstacles:
            pygame.draw.rect(screen, WALL_COLOR, (wall.left, wall.top, wall.width, wall.height))

        route = player.follower.path[player.follower.waypoint_index:]
        if route:
            pygame.draw.lines(screen, PATH_COLOR, False, [player_kin.position, *route], 1)

        for eid, (monster, kin, visual) in world.query(Monster, Kinematic, Visual):
            hunting = world.has(eid, Target)
            if len(monster.trail) > 1:
                pygame.draw.lines(screen, visual.color, False, list(monster.trail), 1)
            if monster.path[monster.waypoint_index:]:
                pygame.draw.lines(
                    screen, visual.color, False,
                    [kin.position, *monster.path[monster.waypoint_index:]], 1,
                )
            draw_agent(screen, kin, visual, filled=hunting)

        draw_agent(screen, player_kin, world.get(player_eid, Visual), filled=True)

        lines = [
            f"Red (tree): {agent_label(world, hunter)}  catches {catches[hunter]}",
            f"Blue (learned): {agent_label(world, learner)}  catches {catches[learner]}",
            f"Recording: {recorder.frames} frames" + (" *" if world.has(hunter, Recorded) else ""),
            status,
            "R reset | 1 record | 2 learn | 3 toggle monsters | A autopilot | Esc quit",
        ]
        for i, text in enumerate(lines):
            surf = font.render(text, True, HUD_COLOR)
            screen.blit(surf, (10, HEIGHT - 18 * (len(lines) - i) - 6))

        pygame.display.flip()

    pygame.quit()
    sys.exit()


def agent_label(world, eid: int) -> str:
    agent = world.get(eid, Agent)
    return f"{agent.action} ({agent.time_in_action:.1f}s)"


def draw_agent(screen, kin: Kinematic, visual: Visual, filled: bool) -> None:
    pos = (int(kin.position[0]), int(kin.position[1]))
    pygame.draw.circle(screen, visual.color, pos, int(visual.radius), 0 if filled else 2)
    heading = vec.from_angle(kin.orientation)
    tip = vec.add(kin.position, vec.scale(heading, visual.radius * 1.8))
    pygame.draw.line(screen, HUD_COLOR, pos, (int(tip[0]), int(tip[1])), 2)


if __name__ == "__main__":
    main()
