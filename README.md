# qbreakout

Building blocks for reinforcement learning experiments: the interfaces an
agent and its world share, a Breakout physics engine that can serve as such a
world, an experience replay store, a frame history buffer and a small
clustering tool for summarising rewards.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## What is inside

- `qbreakout.prelude` defines the learning contract. `Action` is a mixin for
  enumerations of moves; each member's value is its numeric encoding, read
  with `numeric()` and turned back with `from_numeric()` (which raises
  `QlError` for an unknown value); `action_space()` gives the number of moves.
  `Environment` is an abstract base with `reset()`, `state()`,
  `step(action)` returning `(state, reward, done)`,
  `episode_reward_goal_mean()`, and the copying helpers `state_copy()` and
  `step_copy(action)`. `DebugVisualizer` asks for `one_line_info()` and
  `render_to_console()`, both returning text.
- `qbreakout.mechanics` runs the Breakout world on a 600 x 600 grid with
  `BreakoutMechanics`. Each call to
  `time_step(GameInput.action(PanelControl...))` moves the panel and the ball,
  bounces the ball off the walls, the panel and bricks, removes the bricks it
  hits, adds one to `score` per brick and sets `finished` when the ball drops
  to the panel's level or no bricks are left. `accelerate()` and
  `decrease_speed()` are the panel's speed rules.
- `qbreakout.geometry` provides `Vec2`, `AaBB` and `Circle`, the
  `reflected_vector()` and `vector_angle()` helpers, and
  `contact_circle_aabb()`, a circle/box contact test returning a `Contact`
  or `None`.
- `qbreakout.drawer` turns a game state into `CircleShape` and `RectShape`
  values scaled to a canvas size (`GameDrawer(canvas_size, game).shapes()`):
  the bricks first, then the ball, then the panel.
- `qbreakout.frames` holds the four most recent grayscale frames as numpy
  `uint8` arrays (`FrameRingBuffer`, with `add()`, `get(steps_into_history)`
  and `FrameRingBuffer.random()`).
- `qbreakout.replay_buffer` provides `Buffer`, a bounded FIFO, and
  `ReplayBuffer`, which records actions, states, next states, rewards and
  done flags of steps plus recent episode rewards, with
  `avg_episode_reward()`, `min_episode_reward()` and `get_many(indices)`
  returning a `BufferSample`.
- `qbreakout.dbscan` does density-based clustering of numbers
  (`cluster_analysis`); its `ClusterAnalysisResult` prints as a short summary
  such as `4x(1.0..5.0), 4x(noise)`. `magnitude()` gives a number's order of
  magnitude.
- `qbreakout.numformat.format_number` groups digits with underscores, for
  example `1_234_567`.

## Example

```python
from qbreakout.mechanics import BreakoutMechanics, GameInput, PanelControl

game = BreakoutMechanics()
while not game.finished:
    game.time_step(GameInput.action(PanelControl.ACCELERATE_LEFT))
print("score:", game.score)
```

```python
from qbreakout.dbscan import cluster_analysis

result = cluster_analysis([1, 2, 3, 5, 10, 12, 20, 21], 2, 1)
print(result)  # 4x(1.0..5.0), 2x(10.0..12.0), 2x(20.0..21.0)
```

## What it does not do

The package contains no Q-value model, no neural network and no training
loop: nothing here learns, it only supplies the pieces a learner would use.
Nor is there a window, command or other interactive way to play the game;
`GameDrawer` produces shapes, but drawing them on a screen is left to the
caller.