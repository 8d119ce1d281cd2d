from dataclasses import dataclass, field
import yaml
from pathlib import Path

@dataclass
class ScoringConfig:
    """Configuration for composite image similarity"""
    tag_weight: float = 0.5
    description_weight: float = 0.3
    color_weight: float = 0.2
    tag_signal_threshold: float = 0.2
    description_signal_threshold: float = 0.15
    color_signal_threshold: float = 0.3
    boost_multiplier: float = 1.15
    boost_min_signals: int = 1
    delta_e_scale: float = 50.0  # Lab distance at which color similarity hits 0

    def __post_init__(self):
        weights = (self.tag_weight, self.description_weight, self.color_weight)
        if any(w < 0 for w in weights):
            raise ValueError("Similarity weights must be non-negative.")
        if self.delta_e_scale <= 0:
            raise ValueError("delta_e_scale must be positive.")
        if self.boost_multiplier < 0:
            raise ValueError("boost_multiplier must be non-negative.")


@dataclass
class SearchConfig:
    """Configuration for the search pipeline"""
    color_threshold: float = 0.75
    similarity_threshold: float = 0.15
    result_limit: int = 10
    scoring: ScoringConfig = field(default_factory=ScoringConfig)

    def __post_init__(self):
        for name in ('color_threshold', 'similarity_threshold'):
            if not 0.0 <= getattr(self, name) <= 1.0:
                raise ValueError(f"{name} must be within [0, 1].")
        if self.result_limit < 0:
            raise ValueError("result_limit must not be negative.")


@dataclass
class SystemConfig:
    """System-wide configuration"""
    log_level: str = "INFO"
    log_dir: str = "logs"
    n_workers: int = 4
    parallel_min_candidates: int = 500  # Below this, score sequentially
    use_threading: bool = False

    # Search and ranking
    search: SearchConfig = field(default_factory=SearchConfig)

    def to_dict(self) -> dict:
        scoring = self.search.scoring
        return {
            'log_level': self.log_level,
            'log_dir': self.log_dir,
            'n_workers': self.n_workers,
            'parallel_min_candidates': self.parallel_min_candidates,
            'use_threading': self.use_threading,
            'search': {
                'color_threshold': self.search.color_threshold,
                'similarity_threshold': self.search.similarity_threshold,
                'result_limit': self.search.result_limit,
                'scoring': {
                    'tag_weight': scoring.tag_weight,
                    'description_weight': scoring.description_weight,
                    'color_weight': scoring.color_weight,
                    'tag_signal_threshold': scoring.tag_signal_threshold,
                    'description_signal_threshold': scoring.description_signal_threshold,
                    'color_signal_threshold': scoring.color_signal_threshold,
                    'boost_multiplier': scoring.boost_multiplier,
                    'boost_min_signals': scoring.boost_min_signals,
                    'delta_e_scale': scoring.delta_e_scale
                }
            }
        }

    def save(self, path: str = "config.yaml"):
        """Save configuration to YAML file"""
        with open(path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, indent=2)

    @classmethod
    def load(cls, path: str = "config.yaml") -> 'SystemConfig':
        """Load configuration from YAML file"""
        if not Path(path).exists():
            return cls()  # Return default config

        with open(path, 'r') as f:
            config_dict = yaml.safe_load(f) or {}

        config = cls()

        # Load system settings
        config.log_level = config_dict.get('log_level', config.log_level)
        config.log_dir = config_dict.get('log_dir', config.log_dir)
        config.n_workers = config_dict.get('n_workers', config.n_workers)
        config.parallel_min_candidates = config_dict.get(
            'parallel_min_candidates', config.parallel_min_candidates
        )
        config.use_threading = config_dict.get('use_threading', config.use_threading)

        # Load search settings
        if 'search' in config_dict:
            ss = config_dict['search'] or {}
            scoring = config.search.scoring
            if 'scoring' in ss:
                sc = ss['scoring'] or {}
                scoring = ScoringConfig(
                    tag_weight=sc.get('tag_weight', scoring.tag_weight),
                    description_weight=sc.get('description_weight', scoring.description_weight),
                    color_weight=sc.get('color_weight', scoring.color_weight),
                    tag_signal_threshold=sc.get('tag_signal_threshold', scoring.tag_signal_threshold),
                    description_signal_threshold=sc.get(
                        'description_signal_threshold', scoring.description_signal_threshold
                    ),
                    color_signal_threshold=sc.get('color_signal_threshold', scoring.color_signal_threshold),
                    boost_multiplier=sc.get('boost_multiplier', scoring.boost_multiplier),
                    boost_min_signals=sc.get('boost_min_signals', scoring.boost_min_signals),
                    delta_e_scale=sc.get('delta_e_scale', scoring.delta_e_scale)
                )
            config.search = SearchConfig(
                color_threshold=ss.get('color_threshold', config.search.color_threshold),
                similarity_threshold=ss.get('similarity_threshold', config.search.similarity_threshold),
                result_limit=ss.get('result_limit', config.search.result_limit),
                scoring=scoring
            )

        return config
