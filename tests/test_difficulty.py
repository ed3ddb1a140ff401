import unittest

from managers import LevelManager, difficulty_for


class DifficultyTests(unittest.TestCase):
    def test_level_one_uses_base_values(self):
        speed, interval = difficulty_for(1)
        self.assertAlmostEqual(speed, 100.0)
        self.assertAlmostEqual(interval, 1.0)

    def test_level_three(self):
        speed, interval = difficulty_for(3)
        self.assertAlmostEqual(speed, 140.0)
        self.assertAlmostEqual(interval, 0.70)

    def test_fire_interval_clamps_at_floor(self):
        speed, interval = difficulty_for(6)
        self.assertAlmostEqual(speed, 200.0)
        self.assertAlmostEqual(interval, 0.25)
        speed, interval = difficulty_for(7)
        self.assertAlmostEqual(speed, 220.0)
        self.assertAlmostEqual(interval, 0.20)

    def test_monotone_over_levels(self):
        previous = difficulty_for(1)
        for level in range(2, 30):
            current = difficulty_for(level)
            with self.subTest(level=level):
                self.assertGreater(current.enemy_speed, previous.enemy_speed)
                self.assertLessEqual(current.fire_interval, previous.fire_interval)
                self.assertGreaterEqual(current.fire_interval, 0.2)
            previous = current


class LevelManagerTests(unittest.TestCase):
    def test_advance_pays_bonus_for_cleared_level(self):
        lm = LevelManager()
        self.assertEqual(lm.advance(), 500)
        self.assertEqual(lm.level, 2)
        self.assertEqual(lm.advance(), 1000)
        self.assertAlmostEqual(lm.enemy_speed, 140.0)

    def test_advance_resets_direction(self):
        lm = LevelManager()
        lm.direction = -1
        lm.advance()
        self.assertEqual(lm.direction, 1)

    def test_reset(self):
        lm = LevelManager()
        lm.advance()
        lm.reset()
        self.assertEqual(lm.level, 1)
        self.assertAlmostEqual(lm.fire_interval, 1.0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
