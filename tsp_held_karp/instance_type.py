from enum import Enum


class InstanceType(Enum):
    EUCLIDEAN = 1
    ASYMMETRIC = 2
