# main.py

import pygame
import constants
import json
import logging
import logger_setup
import numpy as np
from render_sink import PygameRenderSink
from scene import OrbitScene

# Get the application's dedicated logger
logger = logging.getLogger(constants.LOGGER_NAME)

def run_frame_loop(scene, sink, clock):
    """
    Runs one update-then-render cycle per frame until the window is closed.
    The elapsed wall-clock time of the previous frame drives the simulation.
    """
    running = True
    delta_seconds = 0.0

    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                sink.surface = pygame.display.get_surface()

        scene.tick(delta_seconds)
        scene.render(sink)
        pygame.display.flip()

        delta_seconds = clock.tick(constants.FPS) / 1000.0

    logger.info(f"Frame loop stopped after {scene.ticks} ticks.")

def main(config_path='config.json'):
    """
    Main function to initialize and run the orbit ribbon viewer.
    """
    # --- Setup ---
    logger_setup.setup_logging(config_path)

    with open(config_path, 'r') as f:
        config = json.load(f)
    sim_config = config.get('simulation', {})

    logger.info("Application starting...")
    logger.info(f"Loaded configuration: {config}")

    # Initialize the master random number generator (RNG)
    rng = np.random.default_rng(config.get('master_seed'))
    logger.info(f"Master RNG initialized with seed: {config.get('master_seed')}")

    scene = OrbitScene(sim_config, rng)

    # --- Initialization ---
    pygame.init()
    try:
        screen = pygame.display.set_mode((constants.WIDTH, constants.HEIGHT), pygame.RESIZABLE)
        pygame.display.set_caption(constants.TITLE)
        clock = pygame.time.Clock()
        sink = PygameRenderSink(screen, scene.orbital_radius)

        run_frame_loop(scene, sink, clock)
    except Exception:
        logger.exception("Frame loop failed.")
        raise
    finally:
        logger.info("Application shutting down.")
        pygame.quit()

if __name__ == "__main__":
    main()
