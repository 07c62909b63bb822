"""Collaborator interfaces the session reports to.

Persistence, leaderboards and analytics live outside this package; they see
the game only through these two sinks. Every method receives plain values.
"""
import logging

logger = logging.getLogger(__name__)


class StatsSink:
    def report_game_over(self, final_score, final_level, correct_count):
        pass


class FeedbackSink:
    """Fire-and-forget event hooks. The defaults do nothing."""

    def on_game_start(self):
        pass

    def on_round_start(self, level, operation):
        pass

    def on_correct_hit(self, level, operation, new_score):
        pass

    def on_wrong_hit(self, level, operation, lives_remaining):
        pass

    def on_missed(self, level, operation, lives_remaining):
        pass

    def on_level_up(self, new_level, tier, score):
        pass

    def on_tier_changed(self, tier, description):
        pass

    def on_pause(self, level, score):
        pass

    def on_resume(self, level, score):
        pass


class LoggingStatsSink(StatsSink):
    def report_game_over(self, final_score, final_level, correct_count):
        logger.info('[game-over] score=%s level=%s correct=%s', final_score, final_level, correct_count)


class LoggingFeedbackSink(FeedbackSink):
    def on_game_start(self):
        logger.info('[game-start]')

    def on_round_start(self, level, operation):
        logger.debug('[round] level=%s operation=%s', level, operation)

    def on_correct_hit(self, level, operation, new_score):
        logger.info('[correct] level=%s operation=%s score=%s', level, operation, new_score)

    def on_wrong_hit(self, level, operation, lives_remaining):
        logger.info('[wrong] level=%s operation=%s lives=%s', level, operation, lives_remaining)

    def on_missed(self, level, operation, lives_remaining):
        logger.info('[missed] level=%s operation=%s lives=%s', level, operation, lives_remaining)

    def on_level_up(self, new_level, tier, score):
        logger.info('[level-up] level=%s tier=%s score=%s', new_level, tier, score)

    def on_tier_changed(self, tier, description):
        logger.info('[tier-up] tier=%s description=%r', tier, description)

    def on_pause(self, level, score):
        logger.info('[pause] level=%s score=%s', level, score)

    def on_resume(self, level, score):
        logger.info('[resume] level=%s score=%s', level, score)
