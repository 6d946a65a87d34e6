"""
Evaluation configuration for the document interception environment
"""

# Environment parameters
ENV_CONFIG = {
    "preset": "arcade",
    "mode": "manual",
    "dt": 1/60,
    "k_items": 5,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# Revenue-driven: every dollar counts, misses hurt a little
REWARD_CONFIG_REVENUE = {
    "name": "revenue",
    "description": "Maximise revenue, light miss penalty",
    "r_revenue": 1.0,    # Reward per 1000 revenue processed
    "r_miss": 0.2,       # Penalty per missed document
    "r_shot": 0.0,       # Penalty per projectile fired
}

# Throughput: keep the miss counter low regardless of value
REWARD_CONFIG_THROUGHPUT = {
    "name": "throughput",
    "description": "Avoid misses - the match ends after 20 of them",
    "r_revenue": 0.2,
    "r_miss": 1.0,
    "r_shot": 0.01,
}

REWARD_CONFIGS = {
    "revenue": REWARD_CONFIG_REVENUE,
    "throughput": REWARD_CONFIG_THROUGHPUT,
}

# ==============================================================================
# EVALUATION SETTINGS
# ==============================================================================

EVAL_CONFIG = {
    "seeds": [42, 123, 456],
    "n_episodes": 5,
    "policies": ["idle", "random", "tracker"],
    "modes": ["manual", "autonomous"],
}
