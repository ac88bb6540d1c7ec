"""Ordered CSS selector chains used by the extractor.

Site-specific selectors come first, then schema.org microdata, then generic
list markup. The extractor uses the first selector that yields any text.
"""

INGREDIENT_SELECTORS = [
    ".ingredients-item-name",  # allrecipes (legacy)
    ".mntl-structured-ingredients__list-item",  # allrecipes / dotdash
    ".wprm-recipe-ingredient",  # WP Recipe Maker
    ".tasty-recipes-ingredients li",  # Tasty Recipes
    ".ingredient",
    ".ingred-list li",
    '[itemprop="recipeIngredient"] li',
    '[itemprop="recipeIngredient"]',
    ".ingredients li",
    ".components__item",
]

STEP_SELECTORS = [
    ".instructions-section-item p",  # allrecipes (legacy)
    ".mntl-sc-block-group--LI p",  # allrecipes / dotdash
    ".wprm-recipe-instruction-text",  # WP Recipe Maker
    ".tasty-recipes-instructions li",  # Tasty Recipes
    ".instruction",
    ".directions li",
    '[itemprop="recipeInstructions"] li',
    '[itemprop="recipeInstructions"] p',
    '[itemprop="recipeInstructions"]',
    ".steps li",
    ".method li",
    ".directions p",
]

# Last resort for steps when no chain selector matched
ARTICLE_PARAGRAPHS = "article p"
MAX_ARTICLE_PARAGRAPHS = 20

YIELD_SELECTORS = ['[itemprop="recipeYield"]', '[class*="yield"]']

PREP_TIME_SELECTORS = ('[itemprop="prepTime"]', '[class*="prep"]')
COOK_TIME_SELECTORS = ('[itemprop="cookTime"]', '[class*="cook"]')

EQUIPMENT_CONTAINER = '[class*="equipment"]'
TIPS_CONTAINER = '[class*="tips"]'
