#!/usr/bin/env python3
import argparse
import json
import logging
import os
import random
from typing import Any, Dict

import yaml

from makespan.instance_gen import generate_instance
from makespan.modes.common import AlgoParams
from makespan.modes.compare import ALGORITHMS, run_compare
from makespan.parser import load_instances


def load_config(path: str) -> Dict[str, Any]:
    """Read a YAML (``.yml``/``.yaml``) or JSON config file."""
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    if path.endswith((".yml", ".yaml")):
        return yaml.safe_load(text) or {}
    return json.loads(text)


def params_from_config(cfg: Dict[str, Any]) -> AlgoParams:
    ga_cfg = cfg.get("genetic", {}) if isinstance(cfg.get("genetic"), dict) else {}
    return AlgoParams(
        ga_population_size=int(ga_cfg.get("population_size", 100)),
        ga_generations=int(ga_cfg.get("generations", 1000)),
        ga_mutation_rate=float(ga_cfg.get("mutation_rate", 0.01)),
        ga_elitism=bool(ga_cfg.get("elitism", False)),
        exhaustive_max_jobs=int(cfg.get("exhaustive_max_jobs", 12)),
        exhaustive_prune=bool(cfg.get("exhaustive_prune", False)),
    )


def main(cfg: Dict[str, Any]) -> Dict[str, Dict[str, Dict]]:
    logger = logging.getLogger("makespan")
    seed = cfg.get("seed")
    rng = random.Random(seed) if seed is not None else random.Random()

    source = cfg.get("instances", "reference")
    if not source:
        raise ValueError("Missing 'instances' key in config")
    instances = load_instances(source)

    rand_cfg = cfg.get("random_instances", {}) if isinstance(cfg.get("random_instances"), dict) else {}
    for i in range(int(rand_cfg.get("count", 0))):
        n_jobs = int(rand_cfg.get("jobs", 10))
        machines = int(rand_cfg.get("machines", 3))
        instances.append(
            generate_instance(
                n_jobs,
                machines,
                seed=None if seed is None else seed + i,
                low=int(rand_cfg.get("low", 1)),
                high=int(rand_cfg.get("high", 20)),
                name=f"random_{i}_n{n_jobs}_m{machines}",
            )
        )
    logger.info("Loaded %d instance(s)", len(instances))

    algorithms = cfg.get("algorithms", list(ALGORITHMS))
    charts_cfg = cfg.get("charts", {}) if isinstance(cfg.get("charts"), dict) else {}
    return run_compare(
        instances,
        algorithms,
        params_from_config(cfg),
        rng,
        out_dir=charts_cfg.get("dir", "charts"),
        charts=bool(charts_cfg.get("enabled", True)),
    )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Identical parallel machine scheduling (config only)")
    parser.add_argument(
        "--config",
        required=True,
        help="Path to a YAML/JSON config file",
    )
    args = parser.parse_args()
    cfg = load_config(args.config)

    log_level = cfg.get("log_level", "INFO")
    logging.basicConfig(
        level=getattr(logging, str(log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    main(cfg)
