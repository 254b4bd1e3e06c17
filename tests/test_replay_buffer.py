import pytest

from qbreakout.replay_buffer import Buffer, ReplayBuffer


def test_buffer_rejects_zero_length():
    with pytest.raises(ValueError):
        Buffer(0)


def test_buffer_drops_oldest():
    buf = Buffer(3)
    for e in range(5):
        buf.add(e)
    assert len(buf) == 3
    assert list(buf) == [2, 3, 4]


def test_buffer_get_many_order():
    buf = Buffer(10)
    for e in "abcde":
        buf.add(e)
    assert buf.get_many([4, 0, 2]) == ["e", "a", "c"]


def test_buffer_get_many_out_of_range():
    buf = Buffer(4)
    buf.add(1)
    with pytest.raises(IndexError):
        buf.get_many([1])


def test_replay_buffer_add_and_sample():
    rb = ReplayBuffer(5, 3)
    for i in range(7):
        rb.add(i, f"s{i}", f"s{i + 1}", float(i), i % 2 == 0)
    assert len(rb) == 5
    sample = rb.get_many([0, 4])
    assert sample.action == [2, 6]
    assert sample.state == ["s2", "s6"]
    assert sample.state_next == ["s3", "s7"]
    assert sample.reward == [2.0, 6.0]
    assert sample.done == [True, True]
    assert list(rb.actions()) == [2, 3, 4, 5, 6]


def test_episode_reward_statistics():
    rb = ReplayBuffer(5, 3)
    for r in (10.0, -1.0, 4.0, 7.0):
        rb.add_episode_reward(r)
    assert rb.episode_rewards() == [-1.0, 4.0, 7.0]
    assert rb.min_episode_reward() == -1.0
    assert rb.avg_episode_reward() == pytest.approx(sum([-1.0, 4.0, 7.0]) / 3)


def test_episode_reward_statistics_need_data():
    rb = ReplayBuffer(5, 3)
    with pytest.raises(ValueError):
        rb.avg_episode_reward()
    with pytest.raises(ValueError):
        rb.min_episode_reward()