"""
Evaluation script for scripted player policies
"""

import os
import sys
import argparse
from typing import Callable, Dict, Optional

import numpy as np

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from game.docproc import InterceptEnv
from rl.configs.docproc_config import ENV_CONFIG, EVAL_CONFIG, REWARD_CONFIGS


def idle_policy(env: InterceptEnv, obs: np.ndarray) -> np.ndarray:
    """Never move, never fire"""
    return np.array([0, 0], dtype=np.int64)


def random_policy(env: InterceptEnv, obs: np.ndarray) -> np.ndarray:
    return env.action_space.sample()


def tracker_policy(env: InterceptEnv, obs: np.ndarray) -> np.ndarray:
    """Slide under the lowest document and keep firing"""
    # obs[4] is the lowest document's offset from the player's centre
    dx = obs[4] * env.config.width
    if not env.engine.items or abs(dx) < env.config.item_width / 4:
        move = 0
    elif dx < 0:
        move = 1
    else:
        move = 2
    return np.array([move, 1], dtype=np.int64)


POLICIES: Dict[str, Callable] = {
    "idle": idle_policy,
    "random": random_policy,
    "tracker": tracker_policy,
}


def evaluate_policy(
    policy: str = "tracker",
    mode: str = "manual",
    n_episodes: int = 5,
    seed: Optional[int] = 42,
    reward_config: str = "revenue",
    preset: Optional[str] = None,
):
    """
    Play several headless matches with a scripted policy

    Args:
        policy: One of 'idle', 'random', 'tracker'
        mode: 'manual' or 'autonomous'
        n_episodes: Number of matches to play
        seed: Base random seed (episode i uses seed + i)
        reward_config: Name of the reward shaping to score with
        preset: Config preset, defaults to ENV_CONFIG's
    """
    if policy not in POLICIES:
        raise ValueError(f"Unknown policy: {policy}")
    act = POLICIES[policy]

    reward_params = {k: v for k, v in REWARD_CONFIGS[reward_config].items()
                     if k.startswith("r_")}
    env_kwargs = {**ENV_CONFIG, **reward_params, "mode": mode}
    if preset is not None:
        env_kwargs["preset"] = preset
    env = InterceptEnv(**env_kwargs)

    episode_rewards = []
    episode_lengths = []
    revenues = []
    processed = []
    missed = []

    for episode in range(n_episodes):
        ep_seed = None if seed is None else seed + episode
        obs, info = env.reset(seed=ep_seed)
        env.action_space.seed(ep_seed)

        done = False
        total_reward = 0.0
        steps = 0

        while not done:
            action = act(env, obs)
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward
            steps += 1
            done = terminated or truncated

        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        revenues.append(info["revenue"])
        processed.append(info["processed"])
        missed.append(info["missed"])

        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Revenue = ${info['revenue']:,}, "
              f"Processed = {info['processed']}, Missed = {info['missed']}, "
              f"Ended by {info['end_reason']}")

    env.close()

    results = {
        "mean_reward": float(np.mean(episode_rewards)),
        "std_reward": float(np.std(episode_rewards)),
        "mean_length": float(np.mean(episode_lengths)),
        "mean_revenue": float(np.mean(revenues)),
        "std_revenue": float(np.std(revenues)),
        "mean_processed": float(np.mean(processed)),
        "mean_missed": float(np.mean(missed)),
    }

    print("\n" + "="*50)
    print(f"Evaluation Results ({policy}, {mode}, {n_episodes} episodes):")
    print(f"Mean Reward: {results['mean_reward']:.2f} ± {results['std_reward']:.2f}")
    print(f"Mean Revenue: ${results['mean_revenue']:,.0f} ± {results['std_revenue']:,.0f}")
    print(f"Mean Processed: {results['mean_processed']:.1f}  "
          f"Mean Missed: {results['mean_missed']:.1f}")
    print(f"Mean Episode Length: {results['mean_length']:.1f}")
    print("="*50)

    return results


def main():
    parser = argparse.ArgumentParser(description="Evaluate scripted player policies")
    parser.add_argument(
        "--policy",
        type=str,
        default="tracker",
        choices=list(POLICIES),
        help="Player policy",
    )
    parser.add_argument(
        "--mode",
        type=str,
        default="manual",
        choices=EVAL_CONFIG["modes"],
        help="Game mode (autonomous adds the helper robots)",
    )
    parser.add_argument(
        "--preset",
        type=str,
        default=None,
        help="Config preset (arcade or classic)",
    )
    parser.add_argument(
        "--episodes",
        type=int,
        default=EVAL_CONFIG["n_episodes"],
        help="Number of matches to play",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=EVAL_CONFIG["seeds"][0],
        help="Base random seed",
    )
    parser.add_argument(
        "--reward",
        type=str,
        default="revenue",
        choices=list(REWARD_CONFIGS),
        help="Reward shaping",
    )

    args = parser.parse_args()

    evaluate_policy(
        policy=args.policy,
        mode=args.mode,
        n_episodes=args.episodes,
        seed=args.seed,
        reward_config=args.reward,
        preset=args.preset,
    )


if __name__ == "__main__":
    main()
