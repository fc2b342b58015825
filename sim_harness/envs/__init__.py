from sim_harness.envs.skydrop_env import SkyDropEnv, DEFAULT_ENV_CONFIG

__all__ = ["SkyDropEnv", "DEFAULT_ENV_CONFIG"]
