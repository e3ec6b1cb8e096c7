"""
Static CliftonStrengths reference data: 4 domains, 34 themes, complementary pairings
Loaded once into the ThemeCatalog; nothing in here is mutated at runtime
"""

DOMAINS = [
    {
        "slug": "executing",
        "name": "Executing",
        "description": "People with dominant Executing themes make things happen. They know how to take an idea and transform it into a reality through tireless effort.",
        "color_hex": "#7B68EE",
    },
    {
        "slug": "influencing",
        "name": "Influencing",
        "description": "People with dominant Influencing themes know how to take charge, speak up, and make sure others are heard.",
        "color_hex": "#F5A623",
    },
    {
        "slug": "relationship",
        "name": "Relationship Building",
        "description": "People with dominant Relationship Building themes build strong relationships that hold a team together.",
        "color_hex": "#4A90D9",
    },
    {
        "slug": "strategic",
        "name": "Strategic Thinking",
        "description": "People with dominant Strategic Thinking themes absorb and analyze information that informs better decisions.",
        "color_hex": "#7CB342",
    },
]

THEMES = [
    # Executing (9)
    {
        "name": "Achiever", "slug": "achiever", "domain": "executing",
        "short_description": "A constant drive for accomplishment",
        "works_with": ["Strategic", "Focus", "Discipline", "Activator"],
        "keywords": ["productive", "driven", "hardworking", "busy", "stamina"],
    },
    {
        "name": "Arranger", "slug": "arranger", "domain": "executing",
        "short_description": "Organizing resources for maximum productivity",
        "works_with": ["Strategic", "Maximizer", "Adaptability", "Communication"],
        "keywords": ["organize", "coordinate", "flexible", "juggle", "conductor"],
    },
    {
        "name": "Belief", "slug": "belief", "domain": "executing",
        "short_description": "Core values that guide all actions",
        "works_with": ["Responsibility", "Connectedness", "Empathy", "Futuristic"],
        "keywords": ["values", "ethics", "purpose", "mission", "principles"],
    },
    {
        "name": "Consistency", "slug": "consistency", "domain": "executing",
        "short_description": "Treating everyone equally and fairly",
        "works_with": ["Discipline", "Harmony", "Analytical", "Deliberative"],
        "keywords": ["fair", "equal", "rules", "procedures", "balance"],
    },
    {
        "name": "Deliberative", "slug": "deliberative", "domain": "executing",
        "short_description": "Taking serious care in making decisions",
        "works_with": ["Analytical", "Strategic", "Responsibility", "Focus"],
        "keywords": ["careful", "cautious", "risk", "private", "thoughtful"],
    },
    {
        "name": "Discipline", "slug": "discipline", "domain": "executing",
        "short_description": "Creating order, structure, and routines",
        "works_with": ["Focus", "Achiever", "Responsibility", "Analytical"],
        "keywords": ["routine", "structure", "order", "timelines", "precision"],
    },
    {
        "name": "Focus", "slug": "focus", "domain": "executing",
        "short_description": "Setting and pursuing priorities with single-minded intensity",
        "works_with": ["Achiever", "Discipline", "Strategic", "Maximizer"],
        "keywords": ["goals", "priorities", "direction", "clarity", "efficient"],
    },
    {
        "name": "Responsibility", "slug": "responsibility", "domain": "executing",
        "short_description": "Taking psychological ownership of commitments",
        "works_with": ["Achiever", "Belief", "Discipline", "Relator"],
        "keywords": ["commitment", "ownership", "reliable", "dependable", "accountable"],
    },
    {
        "name": "Restorative", "slug": "restorative", "domain": "executing",
        "short_description": "Solving problems and fixing what's broken",
        "works_with": ["Analytical", "Deliberative", "Learner", "Strategic"],
        "keywords": ["problem-solving", "fix", "troubleshoot", "diagnose", "improve"],
    },
    # Influencing (8)
    {
        "name": "Activator", "slug": "activator", "domain": "influencing",
        "short_description": "Making things happen by turning thoughts into action",
        "works_with": ["Strategic", "Ideation", "Communication", "Achiever"],
        "keywords": ["action", "start", "impatient", "initiate", "catalyst"],
    },
    {
        "name": "Command", "slug": "command", "domain": "influencing",
        "short_description": "Taking control and making decisions",
        "works_with": ["Activator", "Self-Assurance", "Competition", "Strategic"],
        "keywords": ["decisive", "direct", "assertive", "leader", "presence"],
    },
    {
        "name": "Communication", "slug": "communication", "domain": "influencing",
        "short_description": "Expressing thoughts in compelling ways",
        "works_with": ["Woo", "Positivity", "Activator", "Strategic"],
        "keywords": ["storytelling", "presenting", "articulate", "expressive", "vivid"],
    },
    {
        "name": "Competition", "slug": "competition", "domain": "influencing",
        "short_description": "Measuring progress against others' performance",
        "works_with": ["Achiever", "Focus", "Maximizer", "Significance"],
        "keywords": ["winning", "performance", "comparison", "contest", "drive"],
    },
    {
        "name": "Maximizer", "slug": "maximizer", "domain": "influencing",
        "short_description": "Focusing on strengths to stimulate excellence",
        "works_with": ["Individualization", "Developer", "Strategic", "Arranger"],
        "keywords": ["excellence", "strengths", "quality", "best", "optimize"],
    },
    {
        "name": "Self-Assurance", "slug": "self-assurance", "domain": "influencing",
        "short_description": "Inner confidence in one's abilities and judgment",
        "works_with": ["Command", "Activator", "Competition", "Strategic"],
        "keywords": ["confident", "certain", "independent", "bold", "decisive"],
    },
    {
        "name": "Significance", "slug": "significance", "domain": "influencing",
        "short_description": "Wanting to make a meaningful impact",
        "works_with": ["Communication", "Competition", "Achiever", "Focus"],
        "keywords": ["recognition", "impact", "legacy", "visibility", "meaningful"],
    },
    {
        "name": "Woo", "slug": "woo", "domain": "influencing",
        "short_description": "Winning others over through charm and connection",
        "works_with": ["Communication", "Positivity", "Activator", "Empathy"],
        "keywords": ["networking", "charm", "social", "outgoing", "connect"],
    },
    # Relationship Building (9)
    {
        "name": "Adaptability", "slug": "adaptability", "domain": "relationship",
        "short_description": "Going with the flow and living in the moment",
        "works_with": ["Arranger", "Empathy", "Positivity", "Includer"],
        "keywords": ["flexible", "present", "go-with-flow", "responsive", "nimble"],
    },
    {
        "name": "Connectedness", "slug": "connectedness", "domain": "relationship",
        "short_description": "Believing that everything happens for a reason",
        "works_with": ["Belief", "Empathy", "Developer", "Harmony"],
        "keywords": ["meaning", "purpose", "spiritual", "unity", "bridge-builder"],
    },
    {
        "name": "Developer", "slug": "developer", "domain": "relationship",
        "short_description": "Recognizing and cultivating potential in others",
        "works_with": ["Individualization", "Positivity", "Empathy", "Maximizer"],
        "keywords": ["mentor", "coach", "potential", "growth", "nurture"],
    },
    {
        "name": "Empathy", "slug": "empathy", "domain": "relationship",
        "short_description": "Sensing and understanding others' emotions",
        "works_with": ["Developer", "Harmony", "Individualization", "Connectedness"],
        "keywords": ["feelings", "emotional-intelligence", "understanding", "intuitive", "compassion"],
    },
    {
        "name": "Harmony", "slug": "harmony", "domain": "relationship",
        "short_description": "Finding common ground and avoiding conflict",
        "works_with": ["Adaptability", "Empathy", "Consistency", "Includer"],
        "keywords": ["peace", "consensus", "agreement", "practical", "mediator"],
    },
    {
        "name": "Includer", "slug": "includer", "domain": "relationship",
        "short_description": "Accepting everyone and making them feel welcome",
        "works_with": ["Harmony", "Empathy", "Adaptability", "Developer"],
        "keywords": ["welcome", "belonging", "accepting", "diverse", "inclusive"],
    },
    {
        "name": "Individualization", "slug": "individualization", "domain": "relationship",
        "short_description": "Recognizing each person's unique qualities",
        "works_with": ["Developer", "Empathy", "Maximizer", "Arranger"],
        "keywords": ["unique", "personalize", "observe", "tailor", "custom"],
    },
    {
        "name": "Positivity", "slug": "positivity", "domain": "relationship",
        "short_description": "Bringing enthusiasm and energy to others",
        "works_with": ["Communication", "Woo", "Developer", "Adaptability"],
        "keywords": ["optimistic", "enthusiasm", "lighthearted", "upbeat", "encouraging"],
    },
    {
        "name": "Relator", "slug": "relator", "domain": "relationship",
        "short_description": "Building deep, genuine relationships",
        "works_with": ["Responsibility", "Empathy", "Individualization", "Developer"],
        "keywords": ["close-friends", "genuine", "trust", "authentic", "loyal"],
    },
    # Strategic Thinking (8)
    {
        "name": "Analytical", "slug": "analytical", "domain": "strategic",
        "short_description": "Searching for patterns and connections in data",
        "works_with": ["Deliberative", "Learner", "Strategic", "Context"],
        "keywords": ["data", "evidence", "logical", "objective", "research"],
    },
    {
        "name": "Context", "slug": "context", "domain": "strategic",
        "short_description": "Understanding the present by researching the past",
        "works_with": ["Analytical", "Deliberative", "Learner", "Belief"],
        "keywords": ["history", "background", "precedent", "retrospective", "patterns"],
    },
    {
        "name": "Futuristic", "slug": "futuristic", "domain": "strategic",
        "short_description": "Inspired by visions of what could be",
        "works_with": ["Strategic", "Ideation", "Communication", "Belief"],
        "keywords": ["vision", "tomorrow", "dream", "inspire", "possibilities"],
    },
    {
        "name": "Ideation", "slug": "ideation", "domain": "strategic",
        "short_description": "Fascinated by ideas and connections",
        "works_with": ["Strategic", "Futuristic", "Activator", "Input"],
        "keywords": ["creative", "innovation", "brainstorm", "concepts", "connections"],
    },
    {
        "name": "Input", "slug": "input", "domain": "strategic",
        "short_description": "Collecting information and resources",
        "works_with": ["Learner", "Analytical", "Ideation", "Context"],
        "keywords": ["curious", "collect", "archive", "resources", "research"],
    },
    {
        "name": "Intellection", "slug": "intellection", "domain": "strategic",
        "short_description": "Enjoying deep thinking and mental activity",
        "works_with": ["Learner", "Analytical", "Strategic", "Input"],
        "keywords": ["introspective", "contemplative", "philosophical", "deep-thinker", "reflective"],
    },
    {
        "name": "Learner", "slug": "learner", "domain": "strategic",
        "short_description": "Energized by the journey from ignorance to competence",
        "works_with": ["Input", "Analytical", "Intellection", "Achiever"],
        "keywords": ["growth", "education", "development", "curious", "mastery"],
    },
    {
        "name": "Strategic", "slug": "strategic", "domain": "strategic",
        "short_description": "Seeing patterns and creating alternative paths",
        "works_with": ["Futuristic", "Ideation", "Analytical", "Achiever"],
        "keywords": ["patterns", "options", "navigation", "planning", "pathfinding"],
    },
]

# Complementary pairings for partnership suggestions
COMPLEMENTARY_PAIRINGS = [
    ("strategic", "achiever", "powerful", "Vision meets execution - Strategic sees the path, Achiever makes it happen"),
    ("empathy", "command", "complementary", "Emotional intelligence balances direct leadership for impactful decisions"),
    ("analytical", "woo", "complementary", "Data-driven precision meets persuasive charm for compelling presentations"),
    ("input", "arranger", "natural", "Collecting resources paired with organizing them for maximum impact"),
    ("focus", "adaptability", "complementary", "Staying on course while remaining flexible to change"),
    ("futuristic", "achiever", "powerful", "Visionary thinking with practical progress"),
    ("ideation", "discipline", "complementary", "Creative ideas with structured execution"),
    ("learner", "communication", "natural", "Acquiring knowledge and sharing it effectively"),
    ("developer", "individualization", "natural", "Growing people by understanding their unique needs"),
    ("positivity", "deliberative", "complementary", "Optimism balanced with careful risk assessment"),
    ("activator", "strategic", "powerful", "Quick action guided by clear direction"),
    ("responsibility", "relator", "natural", "Deep commitment to trusted relationships"),
]
