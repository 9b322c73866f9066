#########################################################
## AUTHOR: James Beasley                               ##
## DATE: April 8, 2017                                 ##
## ACF: Aggregated Channel Features (Object Detection) ##
#########################################################

#############
## IMPORTS ##
#############
from pathlib import Path
import yaml
from pydantic import BaseModel, Field, field_validator
from acf_features.channel_processor import BASE_CHANNEL_COUNT
from acf_features.feature_evaluator import create_feature_evaluator
from acf_features.feature_processor import BLOCK_SIZE, CHANNEL_COUNT, generate_features
from acf_features.logging_utils import configure_logging

###############
## CONSTANTS ##
###############

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

#############
## CLASSES ##
#############

#detection window size in pixels
class WindowSize(BaseModel):
    width: int = Field(default=64, gt=0)
    height: int = Field(default=128, gt=0)

    def as_tuple(self):
        return (self.width, self.height)

#hyperparameters shared by the catalog generator and the evaluator (both must agree on block size and channel count)
class AcfConfig(BaseModel):
    window_size: WindowSize = Field(default_factory=WindowSize)
    feature_count: int = Field(default=5000, gt=0, description="Requested catalog size")
    block_size: int = Field(default=BLOCK_SIZE, gt=0, description="Pooling block size in pixels")
    channel_count: int = Field(default=CHANNEL_COUNT, gt=0, description="Channel slots per stack")
    log_level: str = Field(default="INFO")

    @field_validator("channel_count")
    @classmethod
    def _check_channel_count(cls, v):
        #the evaluator must be able to hold every channel compute_channels produces
        if (v < BASE_CHANNEL_COUNT):
            raise ValueError("channel_count must be at least {}".format(BASE_CHANNEL_COUNT))
        return v

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, v):
        #accept level names in any case, store them upper case
        level = v.upper()
        if (level not in LOG_LEVELS):
            raise ValueError("log_level must be one of {}".format(", ".join(LOG_LEVELS)))
        return level

    #set up console logging at the configured level
    def configure_logging(self):
        return configure_logging(self.log_level)

    #generate the configured catalog
    def generate_features(self):
        return generate_features(self.window_size.as_tuple(), self.feature_count, self.block_size, self.channel_count)

    #generate the configured catalog and bind it to a new evaluator
    def create_feature_evaluator(self):
        return create_feature_evaluator(self.generate_features(), self.block_size, self.channel_count)

###############
## FUNCTIONS ##
###############

#load and validate a yaml config file (an empty file yields the defaults)
def load_config(path):
    with open(Path(path), mode="r") as f:
        raw = yaml.safe_load(f)
    return AcfConfig(**(raw or {}))
