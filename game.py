import logging
import os
import sys

import pygame
import pygame.mixer

from astromath.config import GameSettings, HIT_PADDING, SHIP_OFFSET, SHIP_WIDTH
from astromath.levels import tier_description
from astromath.models import GameState
from astromath.session import GameSession
from astromath.sinks import LoggingFeedbackSink, LoggingStatsSink

logger = logging.getLogger(__name__)

FONT_NAME = None  # default font
SFX_DIR = os.environ.get('ASTROMATH_SFX_DIR', 'sfx')
SFX_VOLUME = 0.4

# Colors
BG_COLOR = (12, 14, 32)
TEXT_COLOR = (240, 240, 240)
HUD_COLOR = (30, 34, 60)
BLOCK_COLOR = (80, 120, 220)
CORRECT_COLOR = (70, 200, 120)
WRONG_COLOR = (230, 70, 70)
SHIP_COLOR = (230, 230, 255)
PROJECTILE_COLOR = (255, 220, 80)
TIMER_COLOR = (255, 200, 60)


# ------------------------
# Sound
# ------------------------
def load_sounds(names, sfx_dir=SFX_DIR):
    """Load ``<sfx_dir>/<name>.wav`` for every name that exists on disk.

    Sound is optional: if the mixer cannot start (no audio device) or a file
    is missing, the cue is simply left out.
    """
    try:
        pygame.mixer.init()
    except pygame.error as exc:
        logger.warning('[sound-disabled] reason=%s', exc)
        return {}
    sounds = {}
    for name in names:
        path = os.path.join(sfx_dir, f'{name}.wav')
        if not os.path.exists(path):
            continue
        try:
            snd = pygame.mixer.Sound(path)
        except pygame.error as exc:
            logger.warning('[sound-skip] file=%s reason=%s', path, exc)
            continue
        snd.set_volume(SFX_VOLUME)
        sounds[name] = snd
    logger.info('[sound] loaded=%s', ','.join(sorted(sounds)) or '-')
    return sounds


class SoundFeedback(LoggingFeedbackSink):
    """Logs every game event and plays the matching cue when one is loaded."""

    CUES = ('start_game', 'correct', 'wrong', 'lose_life', 'level_up')

    def __init__(self, sounds):
        self.sounds = sounds

    def play(self, name):
        snd = self.sounds.get(name)
        if snd is not None:
            snd.play()

    def on_game_start(self):
        super().on_game_start()
        self.play('start_game')

    def on_correct_hit(self, level, operation, new_score):
        super().on_correct_hit(level, operation, new_score)
        self.play('correct')

    def on_wrong_hit(self, level, operation, lives_remaining):
        super().on_wrong_hit(level, operation, lives_remaining)
        self.play('wrong')

    def on_missed(self, level, operation, lives_remaining):
        super().on_missed(level, operation, lives_remaining)
        self.play('lose_life')

    def on_level_up(self, new_level, tier, score):
        super().on_level_up(new_level, tier, score)
        self.play('level_up')


class SoundStats(LoggingStatsSink):
    def __init__(self, sounds):
        self.sounds = sounds

    def report_game_over(self, final_score, final_level, correct_count):
        super().report_game_over(final_score, final_level, correct_count)
        snd = self.sounds.get('game_over')
        if snd is not None:
            snd.play()


# ------------------------
# UI helpers
# ------------------------
class Button:
    def __init__(self, rect, text, callback):
        self.rect = pygame.Rect(rect)
        self.text = text
        self.callback = callback

    def draw(self, surf, font):
        pygame.draw.rect(surf, (60, 60, 80), self.rect, border_radius=8)
        txt = font.render(self.text, True, TEXT_COLOR)
        surf.blit(txt, txt.get_rect(center=self.rect.center))

    def handle_event(self, event):
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False


# ------------------------
# The Game class
# ------------------------
class AstroMathGame:
    def __init__(self, settings=None, clock=None, rng=None):
        self.settings = settings or GameSettings()
        pygame.init()
        self.width = self.settings.board_width
        self.height = self.settings.board_height
        self.screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption('AstroMath')
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(FONT_NAME, 24)
        self.small_font = pygame.font.Font(FONT_NAME, 20)
        self.large_font = pygame.font.Font(FONT_NAME, 48)

        self.sounds = load_sounds(SoundFeedback.CUES + ('game_over',))
        self.session = GameSession(
            settings=self.settings,
            stats_sink=SoundStats(self.sounds),
            feedback_sink=SoundFeedback(self.sounds),
            clock=clock,
            rng=rng,
        )
        self.running = True
        self.create_menus()

    def create_menus(self):
        cx = self.width // 2
        s = self.session
        self.menu_buttons = [
            Button((cx - 120, 300, 240, 52), 'Start Game', s.start_game),
            Button((cx - 120, 370, 240, 52), 'Quit', self.quit_game),
        ]
        self.pause_buttons = [
            Button((cx - 120, 300, 240, 52), 'Resume', s.resume),
            Button((cx - 120, 370, 240, 52), 'Restart', s.start_game),
            Button((cx - 120, 440, 240, 52), 'Menu', s.quit_to_menu),
        ]
        self.game_over_buttons = [
            Button((cx - 120, 360, 240, 52), 'Retry', s.start_game),
            Button((cx - 120, 430, 240, 52), 'Menu', s.quit_to_menu),
        ]

    def buttons_for_state(self):
        state = self.session.state
        if state == GameState.MENU:
            return self.menu_buttons
        if state == GameState.PAUSED:
            return self.pause_buttons
        if state == GameState.GAME_OVER:
            return self.game_over_buttons
        return []

    def quit_game(self):
        self.running = False

    # ------------------------
    # Main loop & states
    # ------------------------
    def run(self):
        while self.running:
            self.clock.tick(self.settings.fps)
            self.handle_events()
            self.step(pygame.key.get_pressed())
            self.draw()
            pygame.display.flip()
        pygame.quit()

    def handle_events(self):
        for event in pygame.event.get():
            self.handle_event(event)

    def handle_event(self, event):
        if event.type == pygame.QUIT:
            self.quit_game()
            return
        for btn in self.buttons_for_state():
            if btn.handle_event(event):
                return
        if event.type != pygame.KEYDOWN:
            return

        s = self.session
        key = event.key
        if s.state in (GameState.MENU, GameState.GAME_OVER):
            if key in (pygame.K_SPACE, pygame.K_RETURN):
                s.start_game()
            elif key == pygame.K_ESCAPE and s.state == GameState.GAME_OVER:
                s.quit_to_menu()
        elif s.state == GameState.PLAYING:
            if key == pygame.K_SPACE:
                s.fire_projectile()
            elif key in (pygame.K_p, pygame.K_ESCAPE):
                s.pause()
        elif s.state == GameState.PAUSED:
            if key in (pygame.K_p, pygame.K_ESCAPE):
                s.resume()
            elif key == pygame.K_r:
                s.start_game()
            elif key == pygame.K_m:
                s.quit_to_menu()
        elif s.state == GameState.LEVEL_UP:
            if key in (pygame.K_SPACE, pygame.K_RETURN):
                s.skip_level_up()

    def step(self, pressed=None):
        """Apply held movement keys, then advance the session one frame."""
        if pressed is not None and self.session.state == GameState.PLAYING:
            if pressed[pygame.K_LEFT] or pressed[pygame.K_a]:
                self.session.move_player(-1)
            if pressed[pygame.K_RIGHT] or pressed[pygame.K_d]:
                self.session.move_player(1)
        self.session.update()

    # ------------------------
    # Drawing
    # ------------------------
    def draw(self):
        self.screen.fill(BG_COLOR)
        state = self.session.state

        if state == GameState.MENU:
            self.draw_menu()
        elif state == GameState.GAME_OVER:
            self.draw_game_over()
        else:
            self.draw_playing()
            if state == GameState.COUNTDOWN:
                self.draw_countdown()
            elif state == GameState.PAUSED:
                self.draw_paused()
            elif state == GameState.LEVEL_UP:
                self.draw_level_up()

    def blit_center(self, text, font, color, y):
        txt = font.render(text, True, color)
        self.screen.blit(txt, txt.get_rect(center=(self.width // 2, y)))

    def draw_menu(self):
        self.blit_center('AstroMath', self.large_font, TEXT_COLOR, 140)
        self.blit_center('Shoot the block that answers the problem', self.small_font, TEXT_COLOR, 190)
        self.blit_center('LEFT/RIGHT move   SPACE fire   P pause', self.small_font, TEXT_COLOR, 220)
        for btn in self.menu_buttons:
            btn.draw(self.screen, self.font)

    def draw_game_over(self):
        snap = self.session.snapshot()
        self.blit_center('Game Over', self.large_font, WRONG_COLOR, 200)
        self.blit_center(f"Score: {snap['score']}   Level: {snap['level']}", self.font, TEXT_COLOR, 270)
        for btn in self.game_over_buttons:
            btn.draw(self.screen, self.font)

    def draw_overlay(self, alpha=160):
        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        overlay.fill((10, 10, 10, alpha))
        self.screen.blit(overlay, (0, 0))

    def draw_countdown(self):
        self.draw_overlay(120)
        self.blit_center(str(self.session.countdown_number), self.large_font, TIMER_COLOR, self.height // 2)

    def draw_paused(self):
        self.draw_overlay()
        self.blit_center('Paused', self.large_font, TEXT_COLOR, 220)
        for btn in self.pause_buttons:
            btn.draw(self.screen, self.font)

    def draw_level_up(self):
        level = self.session.score.level
        self.draw_overlay()
        self.blit_center(f'Level {level}!', self.large_font, CORRECT_COLOR, 260)
        self.blit_center(tier_description(level), self.small_font, TEXT_COLOR, 310)
        self.blit_center('Press SPACE to continue', self.small_font, TEXT_COLOR, 350)

    def draw_playing(self):
        s = self.session
        snap = s.snapshot()
        bw, bh = self.settings.block_width, self.settings.block_height

        # HUD
        pygame.draw.rect(self.screen, HUD_COLOR, (0, 0, self.width, 40))
        hud = self.small_font.render(
            f"Score: {snap['score']}   Lives: {snap['lives']}   Level: {snap['level']}   Tier: {snap['tier']}",
            True, TEXT_COLOR)
        self.screen.blit(hud, (12, 12))

        # Problem and time bar
        if snap['problem']:
            self.blit_center(snap['problem'], self.font, TEXT_COLOR, self.height - 40)
        bar_w = int((self.width - 24) * snap['time_remaining'])
        pygame.draw.rect(self.screen, TIMER_COLOR, (12, 44, bar_w, 6))

        # Answer blocks
        flash = snap['last_hit_result']
        color = {'correct': CORRECT_COLOR, 'wrong': WRONG_COLOR}.get(flash, BLOCK_COLOR)
        for block in s.answer_blocks:
            rect = pygame.Rect(int(block.x - bw / 2), int(block.y - bh / 2), bw, bh)
            pygame.draw.rect(self.screen, color, rect, border_radius=6)
            txt = self.font.render(block.display_value, True, TEXT_COLOR)
            self.screen.blit(txt, txt.get_rect(center=rect.center))

        # Ship & projectile
        ship_y = self.height - SHIP_OFFSET
        x = s.player_x
        half = SHIP_WIDTH // 2
        pygame.draw.polygon(self.screen, SHIP_COLOR, [(x, ship_y - 20), (x - half, ship_y + 20), (x + half, ship_y + 20)])
        p = s.projectile
        if p is not None and p.active:
            pygame.draw.rect(self.screen, PROJECTILE_COLOR, (int(p.x) - 2, int(p.y) - HIT_PADDING * 2, 4, HIT_PADDING * 4))


# ------------------------
# Run if main
# ------------------------
def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    game = AstroMathGame(GameSettings.from_env())
    game.run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
