DEFAULT_CONFIG = {
    # -----------------------------
    # COLUMN CLASSIFICATION
    # -----------------------------
    "classification": {
        "sample_size": 10,
        "temporal_ratio": 0.5,
        "keyword_temporal_ratio": 0.3,
        "small_sample_size": 3,
        "numeric_ratio": 0.7,
    },

    # -----------------------------
    # MISSING VALUE IMPUTATION
    # -----------------------------
    "imputation": {
        "numeric": "mean",       # mean | median | mode | forward-fill | backward-fill
        "text": "constant",      # constant | mode | forward-fill | backward-fill
        "temporal": "today",     # today | interpolate | forward-fill | backward-fill
        "constant": "N/A",
        "columns": {},           # per-column overrides by header name
    },

    # -----------------------------
    # REGRESSION
    # -----------------------------
    "regression": {
        "prediction_steps": 20,
    },

    # -----------------------------
    # TIME SERIES
    # -----------------------------
    "forecast": {
        "periods": 6,
        "window": 3,
        "trend_threshold": 0.01,   # value units per day
        "seasonality_min_points": 12,
        "seasonality_max_r_squared": 0.8,
        "confidence_floor": 0.1,
    },

    # -----------------------------
    # LLM NARRATIVE
    # -----------------------------
    "narrative": {
        "enabled": False,      # OFF by default
        "provider": "openai",
        "model": "gpt-4o-mini",
        "temperature": 0.3,
        "max_tokens": 150,
        "timeout": 15,
    },

    # -----------------------------
    # OUTPUT CONTROL
    # -----------------------------
    "output_dir": "runs",
}
