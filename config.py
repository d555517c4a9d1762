"""Project-wide configuration constants."""

from pathlib import Path
from typing import Dict

from sklearn.ensemble import RandomForestClassifier
from sklearn.linear_model import ElasticNetCV, LassoCV, RidgeCV
from sklearn.neighbors import KNeighborsClassifier
from sklearn.svm import SVC
from sklearn.tree import DecisionTreeClassifier

DATA_DIR = Path("data")
RAW_DATA_DIR = DATA_DIR / "raw"

RANDOM_SEED = 42

_COURSE_DATA_URL = "https://raw.githubusercontent.com/JuliaAcademy/DataScience/main/data"

DATASET_URLS: Dict[str, str] = {
    "programming_languages.csv": (
        "https://raw.githubusercontent.com/nassarhuda/easy_data/master/programming_languages.csv"
    ),
    "cars.json": "https://cdn.jsdelivr.net/npm/vega-datasets@2/data/cars.json",
    "zillow_data_download_april2020.xlsx": f"{_COURSE_DATA_URL}/zillow_data_download_april2020.xlsx",
    "khiam-small.jpg": f"{_COURSE_DATA_URL}/khiam-small.jpg",
    "face_recog_qr.mat": f"{_COURSE_DATA_URL}/face_recog_qr.mat",
}

# Regularised regressors are fit on encoded class codes and rounded back to classes.
REGRESSION_CLASSIFIER_SPECS = {
    "Lasso": (LassoCV, {"cv": 10, "random_state": RANDOM_SEED}),
    "Ridge": (RidgeCV, {"alphas": (0.001, 0.01, 0.1, 1.0, 10.0, 100.0)}),
    "Elastic Net": (ElasticNetCV, {"l1_ratio": 0.5, "cv": 10, "random_state": RANDOM_SEED}),
}

KNN_NEIGHBOURS = 5

MODEL_SPECS = {
    "DT": (DecisionTreeClassifier, {"max_depth": 2, "random_state": RANDOM_SEED}),
    "RF": (RandomForestClassifier, {"n_estimators": 20, "random_state": RANDOM_SEED}),
    "kNN": (KNeighborsClassifier, {"n_neighbors": KNN_NEIGHBOURS, "algorithm": "kd_tree"}),
    "SVM": (SVC, {"kernel": "rbf", "gamma": "scale"}),
}

MODEL_DICT: Dict[str, object] = {
    name: estimator_cls(**params) for name, (estimator_cls, params) in MODEL_SPECS.items()
}
