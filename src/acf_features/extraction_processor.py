#########################################################
## AUTHOR: James Beasley                               ##
## DATE: April 8, 2017                                 ##
## ACF: Aggregated Channel Features (Object Detection) ##
#########################################################

#############
## IMPORTS ##
#############
import numpy as np
from acf_features.channel_processor import compute_channels, complete_channel_stack
from acf_features.logging_utils import get_logger

logger = get_logger(__name__)

###############
## FUNCTIONS ##
###############

#extract the pooled channel feature vector for each rgb image (training sample) in the supplied set
#returns an (n_images, n_features) int32 matrix, row i holds the feature vector of image i
def perform_feature_extraction(X, evaluator):
    #verify we have something to work with
    if (len(X) == 0):
        raise ValueError("Cannot extract features from an empty image set")
    #local vars
    X_features = np.empty((len(X), evaluator.feature_count), dtype=np.int32)  #one row per image
    #enumerate the rgb images in the data set and extract features for each
    for cur_index, cur_rgb_image in enumerate(X):
        #decompose into the base channels
        channels = compute_channels(cur_rgb_image)
        #fill the reserved channel slots the evaluator expects
        channels = complete_channel_stack(channels, evaluator.channel_count)
        #bind the stack and evaluate every cataloged feature straight into this image's row
        evaluator.set_channels(channels)
        evaluator.evaluate_all(out=X_features[cur_index])
    logger.debug("extracted %d features from each of %d images", evaluator.feature_count, len(X))
    #return features
    return X_features
