"""SkyDrop harness: Gymnasium environment, runner and configs."""
