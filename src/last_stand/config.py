from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Reward table (created with defaults on first load)
CONFIG_DIR = PROJECT_ROOT / "config"
REWARD_CONFIG_FILE = CONFIG_DIR / "last_stand_rewards.csv"

# Rotating plugin log
LOG_DIR = PROJECT_ROOT / "logs"
LOG_FILE_NAME = "last_stand.log"
PACKAGE_LOGGER = "src.last_stand"

REWARD_CONFIG_COLUMNS = ["name", "config_key", "spawn_reference", "weight", "description"]

# Pity weapons, in selection order: (name, config key, spawn reference, default weight)
DEFAULT_REWARDS = [
    ("Handgun", "HandgunProbability", "items/Item Gun Handgun", 0.15),
    ("Tranq Gun", "TranqGunProbability", "items/Item Gun Tranq", 0.3),
    ("Duct Taped Grenade", "DuctTapedGrenadeProbability", "items/Item Grenade Duct Taped", 0.4),
    ("Grenade", "GrenadeProbability", "items/Item Grenade Explosive", 0.5),
    ("Shotgun", "ShotgunProbability", "items/Item Gun Shotgun", 0.05),
    ("Baseball Bat", "BaseballBatProbability", "items/Item Melee Baseball Bat", 0.5),
    ("Frying Pan", "FryingPanProbability", "items/Item Melee Frying Pan", 0.5),
    ("Inflatable Hammer", "InflatableHammerProbability", "items/Item Melee Inflatable Hammer", 0.4),
    ("Sledge Hammer", "SledgeHammerProbability", "items/Item Melee Sledge Hammer", 0.3),
    ("Sword", "SwordProbability", "items/Item Melee Sword", 0.3),
    ("Mine", "ExplosiveMineProbability", "items/Item Mine Explosive", 0.5),
    ("Rubber Duck", "RubberDuckProbability", "items/Item Rubber Duck", 0.01),
    ("Valuable Clown", "ValuableClownProbability", "valuables/03 medium/Valuable Clown", 0.1),
]

# Announcement shown once per round when last stand activates
RED = (1.0, 0.0, 0.0, 1.0)
ANNOUNCEMENT_TITLE = "LAST STAND ACTIVATED"
ANNOUNCEMENT_SUBTITLE = "{!}"
ANNOUNCEMENT_DURATION = 25.0
FOCUS_TEXT_MESSAGE = "Not enough loot to complete the level! Take your last stand!"
FOCUS_TEXT_DURATION = 3.0

# Camera feedback at the reward spawn point
SHAKE_INTENSITY = 3.0
SHAKE_DISTANCE = 3.0
SHAKE_DURATION = 8.0
SHAKE_FALLOFF = 0.1
