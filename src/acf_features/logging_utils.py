#########################################################
## AUTHOR: James Beasley                               ##
## DATE: April 8, 2017                                 ##
## ACF: Aggregated Channel Features (Object Detection) ##
#########################################################

#############
## IMPORTS ##
#############
import logging
from rich.console import Console
from rich.logging import RichHandler

#module level state (configure once)
_console = Console(stderr=True)
_configured = False

###############
## FUNCTIONS ##
###############

#install a rich console handler on the acf_features logger (safe to call more than once)
def configure_logging(level="INFO"):
    global _configured
    package_logger = logging.getLogger("acf_features")
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    #only attach the handler the first time through
    if (_configured):
        return package_logger
    console_handler = RichHandler(console=_console, rich_tracebacks=True, show_path=False)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(console_handler)
    _configured = True
    return package_logger

#get a named logger (typically __name__), library modules log at debug level and leave handler setup to configure_logging()
def get_logger(name):
    return logging.getLogger(name)
