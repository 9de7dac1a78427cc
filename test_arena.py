"""
Tests for tier-vs-tier games and ELO bookkeeping.
"""
import pytest

from reversi.arena import Arena, TierPlayer, ELORatingSystem


def make_arena(*tiers):
    arena = Arena(ELORatingSystem(k=32, initial_rating=1500.0))
    for i, tier in enumerate(tiers):
        arena.add_player(TierPlayer(tier, tier, seed=i))
    return arena


def random_tier_arena():
    arena = Arena(ELORatingSystem())
    arena.add_player(TierPlayer('beginner', 'beginner', seed=0))
    arena.add_player(TierPlayer('beginner2', 'beginner', seed=1))
    return arena


def test_elo_update():
    elo = ELORatingSystem(k=32, initial_rating=1500.0)
    assert elo.expected_score(1500, 1500) == 0.5

    delta = elo.update('a', 'b', 1.0)
    assert delta == pytest.approx(16.0)
    assert elo.rating('a') == pytest.approx(1516.0)
    assert elo.rating('b') == pytest.approx(1484.0)
    assert elo.rating('unknown') == 1500.0

    elo.update('a', 'b', 0.5)
    assert elo.rating('a') + elo.rating('b') == pytest.approx(3000.0)

    board = elo.leaderboard()
    assert [row['player_id'] for row in board] == ['a', 'b']
    assert (board[0]['wins'], board[0]['draws'], board[0]['losses'], board[0]['games']) == (1, 1, 0, 2)
    assert (board[1]['wins'], board[1]['draws'], board[1]['losses']) == (0, 1, 1)


def test_repeated_games_continue_the_random_stream():
    arena = random_tier_arena()
    results = [arena.play_game('beginner', 'beginner2') for _ in range(4)]
    assert all(result in (0.0, 0.5, 1.0) for result in results)
    assert len({tuple(game.moves) for game in arena.games}) > 1, \
        "The same pairing should not replay the same game"


def test_tournament_games_differ_but_tournament_is_reproducible():
    first = random_tier_arena().run_tournament(rounds=4)
    games = [tuple(map(tuple, game['moves'])) for game in first['games']]
    assert len(games) == 4
    assert len(set(games)) == 4, "Every round should produce a new game"

    second = random_tier_arena().run_tournament(rounds=4)
    assert [game['moves'] for game in second['games']] == [game['moves'] for game in first['games']]
    assert second['leaderboard'] == first['leaderboard']


def test_play_game_unknown_player():
    arena = make_arena('easy')
    with pytest.raises(ValueError):
        arena.play_game('easy', 'hard')


def test_run_tournament():
    arena = make_arena('beginner', 'easy')
    results = arena.run_tournament(rounds=2)

    assert results['games_played'] == 2
    assert [(g['black'], g['white']) for g in results['games']] == [('beginner', 'easy'), ('easy', 'beginner')]
    for game in results['games']:
        assert game['black_discs'] + game['white_discs'] <= 64
        assert len(game['moves']) == game['black_discs'] + game['white_discs'] - 4

    matchup = results['matchups']['beginner_vs_easy']
    assert matchup['wins1'] + matchup['wins2'] + matchup['draws'] == 2
    assert len(results['leaderboard']) == 2
    total = sum(p['rating'] for p in results['leaderboard'])
    assert total == pytest.approx(3000.0)
    assert all(p['games'] == 2 for p in results['leaderboard'])

    with pytest.raises(ValueError):
        make_arena('easy').run_tournament(rounds=1)


def test_save_and_load_results(tmp_path):
    arena = make_arena('beginner', 'easy')
    arena.run_tournament(rounds=1)

    results_file = tmp_path / "results.json"
    arena.save_results(str(results_file))
    assert results_file.exists()

    loaded = ELORatingSystem.load(str(tmp_path / "results_elo.json"))
    assert loaded.k == arena.elo.k
    assert [row['player_id'] for row in loaded.leaderboard()] == \
        [row['player_id'] for row in arena.elo.leaderboard()]
    for player_id, record in arena.elo.players.items():
        assert loaded.players[player_id].rating == pytest.approx(record.rating)
        assert loaded.players[player_id].games == 1
