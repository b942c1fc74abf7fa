"""
Static quiz definitions and metadata tables.

Three quiz types share the same engine:
- subject_aptitude: 8 school subjects, option position selects the subject, ranked
  directly and as academic streams (MPC, BiPC, CEC, HEC, MEC).
- degree_branch: 8 degree branches, every option carries its own branch and weight.
- career_profile: 6 profile dimensions feeding the AI career quiz.
"""
from app.domain.entities.question import AnswerOption, Question
from app.domain.entities.quiz import NormalizationPolicy, QuizDefinition, StreamDefinition
from app.domain.entities.recommendation import CareerMetadata
from app.domain.errors import NotFoundError


SUBJECT_APTITUDE = 'subject_aptitude'
DEGREE_BRANCH = 'degree_branch'
CAREER_PROFILE = 'career_profile'


def _simple_question(question_id: int, text: str, category: str,
                     options: list[str], categories: tuple) -> Question:
    # Option i always feeds category i of the quiz
    return Question(
        id=question_id,
        text=text,
        category=category,
        options=[AnswerOption(text=option, category=categories[i], weight=1)
                 for i, option in enumerate(options)],
    )


def _weighted_question(question_id: int, text: str, options: list[tuple], category: str = None) -> Question:
    return Question(
        id=question_id,
        text=text,
        category=category,
        options=[AnswerOption(text=option, category=branch, weight=weight)
                 for option, branch, weight in options],
    )


# Subject aptitude

SUBJECT_CATEGORIES = (
    'mathematics', 'physics', 'chemistry', 'biology',
    'commerce', 'humanities', 'arts', 'technology',
)

SUBJECT_METADATA = {
    'mathematics': CareerMetadata(title='Mathematics', icon='🧮', description='Relevant streams: MPC, MEC'),
    'physics': CareerMetadata(title='Physics', icon='⚛️', description='Relevant streams: MPC, BiPC'),
    'chemistry': CareerMetadata(title='Chemistry', icon='🧪', description='Relevant streams: MPC, BiPC'),
    'biology': CareerMetadata(title='Biology', icon='🌿', description='Relevant streams: BiPC'),
    'commerce': CareerMetadata(title='Commerce', icon='💼', description='Relevant streams: CEC, MEC'),
    'humanities': CareerMetadata(title='Humanities', icon='📖', description='Relevant streams: HEC'),
    'arts': CareerMetadata(title='Arts', icon='🎨', description='Relevant streams: HEC'),
    'technology': CareerMetadata(title='Technology', icon='💻', description='Relevant streams: MPC, CEC'),
}

SUBJECT_STREAMS = (
    StreamDefinition(
        code='MPC',
        components={'mathematics': 1, 'physics': 1, 'chemistry': 1, 'technology': 1},
        metadata=CareerMetadata(
            title='MPC (Mathematics, Physics, Chemistry)',
            description='Engineering, architecture, pure sciences and research',
            salary_band='₹3-15 LPA',
            careers=('Engineering', 'Architecture', 'Pure Sciences', 'Research'),
        ),
    ),
    StreamDefinition(
        code='BiPC',
        components={'biology': 1, 'physics': 1, 'chemistry': 1},
        metadata=CareerMetadata(
            title='BiPC (Biology, Physics, Chemistry)',
            description='Medicine, pharmacy, biotechnology and life-science research',
            salary_band='₹3-25 LPA',
            careers=('Medicine', 'Pharmacy', 'Biotechnology', 'Research'),
        ),
    ),
    StreamDefinition(
        code='CEC',
        components={'commerce': 1, 'mathematics': 1, 'technology': 1},
        metadata=CareerMetadata(
            title='CEC (Civics, Economics, Commerce)',
            description='Chartered accountancy, company secretary, business administration and finance',
            salary_band='₹3-20 LPA',
            careers=('Chartered Accountancy', 'Company Secretary', 'Business Administration', 'Finance'),
        ),
    ),
    StreamDefinition(
        code='HEC',
        components={'humanities': 1, 'arts': 1},
        metadata=CareerMetadata(
            title='HEC (History, Economics, Civics)',
            description='Civil services, teaching, research and journalism',
            salary_band='₹3-15 LPA',
            careers=('Civil Services', 'Teaching', 'Research', 'Journalism'),
        ),
    ),
    StreamDefinition(
        code='MEC',
        components={'mathematics': 1, 'commerce': 1, 'technology': 1},
        metadata=CareerMetadata(
            title='MEC (Math, Economics, Commerce)',
            description='Investment banking, data analytics and actuarial work',
            salary_band='₹4-20 LPA',
            careers=('Investment Banking', 'Data Analytics'),
        ),
    ),
)

_SUBJECT_QUESTIONS = [
    (1, "Which subject do you find most interesting to solve problems in?", "interest",
     ["Solving mathematical equations", "Understanding how machines work", "Learning about chemical reactions",
      "Studying living organisms", "Analyzing business scenarios", "Reading about history and society",
      "Creating art and designs", "Working with computers and technology"]),
    (2, "What type of projects would you enjoy working on?", "project",
     ["Mathematical modeling and calculations", "Building and designing mechanical systems",
      "Conducting experiments in a lab", "Researching environmental or medical topics",
      "Financial planning and market analysis", "Writing articles or studying cultures",
      "Designing graphics or creative content", "Developing apps or programming"]),
    (3, "Which career field appeals to you the most?", "career",
     ["Engineering or Architecture", "Medical or Healthcare", "Research or Scientific work", "Business or Finance",
      "Teaching or Social work", "Journalism or Media", "Design or Creative arts", "IT or Computer Science"]),
    (4, "What do you enjoy learning about in your free time?", "learning",
     ["Mathematics and logical puzzles", "Physics and how things work", "Chemistry and scientific discoveries",
      "Biology and nature", "Economics and current affairs", "History and literature", "Art and music",
      "Technology and gadgets"]),
    (5, "Which school subject do you perform best in?", "performance",
     ["Mathematics", "Physics", "Chemistry", "Biology", "Business Studies", "Social Science", "Arts/Crafts",
      "Computer Science"]),
    (6, "What kind of problems do you like to solve?", "problem_solving",
     ["Mathematical and numerical problems", "Technical and mechanical problems",
      "Scientific and experimental problems", "Health and environmental problems",
      "Business and financial problems", "Social and ethical problems", "Creative and design problems",
      "Digital and programming problems"]),
    (7, "Which activity would you choose for a school project?", "activity",
     ["Creating mathematical models", "Building a working model", "Conducting chemical experiments",
      "Studying ecosystems", "Analyzing market trends", "Researching historical events",
      "Designing posters or websites", "Developing a mobile app"]),
    (8, "What motivates you most in studies?", "motivation",
     ["Solving complex equations", "Understanding scientific principles", "Discovering new knowledge",
      "Helping others and society", "Achieving financial success", "Understanding human behavior",
      "Expressing creativity", "Innovation and technology"]),
    (9, "Which university course sounds most appealing?", "course",
     ["B.Tech in Engineering", "MBBS or Medical", "B.Sc in Science", "B.Com or MBA", "BA in Humanities",
      "BFA in Fine Arts", "BCA or B.Tech in CS", "B.Pharm or Biotechnology"]),
    (10, "What do you see yourself doing in the future?", "future",
     ["Working as an engineer or scientist", "Being a doctor or healthcare professional", "Researching in a lab",
      "Running a business", "Teaching or counseling", "Working in media or arts", "Designing or creating",
      "Developing technology solutions"]),
]

SUBJECT_APTITUDE_QUIZ = QuizDefinition(
    quiz_type=SUBJECT_APTITUDE,
    title='Career Aptitude Assessment',
    categories=SUBJECT_CATEGORIES,
    questions=[_simple_question(qid, text, tag, options, SUBJECT_CATEGORIES)
               for qid, text, tag, options in _SUBJECT_QUESTIONS],
    normalization=NormalizationPolicy.TOTAL_QUESTIONS,
    metadata=SUBJECT_METADATA,
    streams=SUBJECT_STREAMS,
)


# Degree branch aptitude

BRANCH_CATEGORIES = (
    'computerScience', 'engineering', 'medicine', 'business',
    'arts', 'science', 'law', 'design',
)

BRANCH_METADATA = {
    'computerScience': CareerMetadata(
        title='Computer Science',
        description='Software development, AI, data science, and technology innovation',
        careers=('Software Engineer', 'Data Scientist', 'AI Engineer', 'Full Stack Developer'),
        salary_band='₹6-15 LPA', icon='💻'),
    'engineering': CareerMetadata(
        title='Engineering',
        description='Designing, building, and maintaining technological systems and infrastructure',
        careers=('Mechanical Engineer', 'Civil Engineer', 'Electrical Engineer', 'Chemical Engineer'),
        salary_band='₹5-12 LPA', icon='🎯'),
    'medicine': CareerMetadata(
        title='Medicine',
        description='Healthcare, medical research, and patient care',
        careers=('Doctor', 'Surgeon', 'Pharmacist', 'Medical Researcher'),
        salary_band='₹8-25 LPA', icon='🔬'),
    'business': CareerMetadata(
        title='Business & Management',
        description='Corporate management, entrepreneurship, and business strategy',
        careers=('Business Analyst', 'Marketing Manager', 'Entrepreneur', 'Management Consultant'),
        salary_band='₹6-18 LPA', icon='👥'),
    'arts': CareerMetadata(
        title='Arts & Humanities',
        description='Creative expression, literature, philosophy, and cultural studies',
        careers=('Writer', 'Journalist', 'Teacher', 'Content Creator'),
        salary_band='₹3-8 LPA', icon='🎨'),
    'science': CareerMetadata(
        title='Pure Sciences',
        description='Research, teaching, and advanced scientific study',
        careers=('Research Scientist', 'Professor', 'Lab Technician', 'Science Writer'),
        salary_band='₹4-10 LPA', icon='📘'),
    'law': CareerMetadata(
        title='Law & Justice',
        description='Legal practice, policy-making, and justice system',
        careers=('Lawyer', 'Judge', 'Legal Consultant', 'Policy Analyst'),
        salary_band='₹5-15 LPA', icon='⚖️'),
    'design': CareerMetadata(
        title='Design & Creative',
        description='Visual design, UX/UI, fashion, and creative industries',
        careers=('UX Designer', 'Graphic Designer', 'Fashion Designer', 'Creative Director'),
        salary_band='₹4-12 LPA', icon='✏️'),
}

_BRANCH_QUESTIONS = [
    (1, "When solving complex problems, I prefer to:", [
        ("Use logical reasoning and mathematical approaches", 'engineering', 3),
        ("Analyze data and find patterns", 'computerScience', 3),
        ("Work with people and understand their needs", 'business', 2),
        ("Create visual or artistic solutions", 'design', 3)]),
    (2, "In a group project, I would most enjoy:", [
        ("Leading the team and coordinating tasks", 'business', 3),
        ("Designing the user interface or presentation", 'design', 3),
        ("Writing code or building the technical solution", 'computerScience', 3),
        ("Researching and analyzing data", 'science', 2)]),
    (3, "Which subject interests you most for future study?", [
        ("Computer Programming and Algorithms", 'computerScience', 4),
        ("Mechanical or Electrical Engineering", 'engineering', 4),
        ("Human Anatomy and Medical Sciences", 'medicine', 4),
        ("Business Management and Economics", 'business', 4)]),
    (4, "I am most motivated by:", [
        ("Solving technical challenges and innovation", 'engineering', 3),
        ("Helping others and making a difference", 'medicine', 3),
        ("Building successful companies and wealth", 'business', 3),
        ("Creating beautiful and functional designs", 'design', 3)]),
    (5, "Which work environment appeals to you most?", [
        ("Research laboratory or hospital", 'medicine', 3),
        ("Modern office with creative teams", 'design', 3),
        ("Tech startup or software company", 'computerScience', 3),
        ("Corporate office or business firm", 'business', 3)]),
    (6, "I excel at:", [
        ("Mathematics and logical problem-solving", 'engineering', 3),
        ("Creative thinking and artistic expression", 'arts', 3),
        ("Understanding complex systems and data", 'computerScience', 3),
        ("Communicating and persuading others", 'law', 3)]),
    (7, "My ideal career involves:", [
        ("Working with cutting-edge technology", 'computerScience', 4),
        ("Designing products that people love", 'design', 4),
        ("Managing teams and growing businesses", 'business', 4),
        ("Conducting scientific research", 'science', 4)]),
    (8, "Which skill would you most like to develop?", [
        ("Programming and software development", 'computerScience', 3),
        ("Engineering design and prototyping", 'engineering', 3),
        ("Medical diagnosis and patient care", 'medicine', 3),
        ("Legal research and argumentation", 'law', 3)]),
    (9, "I am most interested in:", [
        ("How things work and building new devices", 'engineering', 3),
        ("Human behavior and psychology", 'arts', 3),
        ("Digital innovation and AI", 'computerScience', 3),
        ("Social issues and justice", 'law', 3)]),
    (10, "Which achievement would make you proudest?", [
        ("Developing a life-saving medical treatment", 'medicine', 4),
        ("Building a successful tech startup", 'business', 4),
        ("Creating a revolutionary software application", 'computerScience', 4),
        ("Designing an award-winning product", 'design', 4)]),
]

DEGREE_BRANCH_QUIZ = QuizDefinition(
    quiz_type=DEGREE_BRANCH,
    title='Degree Branch Aptitude Assessment',
    categories=BRANCH_CATEGORIES,
    questions=[_weighted_question(qid, text, options) for qid, text, options in _BRANCH_QUESTIONS],
    normalization=NormalizationPolicy.MAX_OBSERVED,
    metadata=BRANCH_METADATA,
)


# Career profile (AI career quiz)

PROFILE_CATEGORIES = (
    'technical', 'creative', 'analytical',
    'leadership', 'communication', 'regionalImpact',
)

# Fallback career table, one career per dimension, used when no text-generation output is available
PROFILE_METADATA = {
    'technical': CareerMetadata(
        title='Software Engineer',
        description='Develop software solutions and applications using programming languages and development tools.',
        salary_band='₹6-15 LPA', demand='High', work_life_balance='Good', job_security='High',
        icon='💻', field='Technology'),
    'creative': CareerMetadata(
        title='UX/UI Designer',
        description='Create user-friendly and visually appealing digital interfaces.',
        salary_band='₹5-12 LPA', demand='High', work_life_balance='Excellent', job_security='Medium',
        icon='🎨', field='Design'),
    'analytical': CareerMetadata(
        title='Data Scientist',
        description='Analyze complex data to help organizations make informed decisions.',
        salary_band='₹8-20 LPA', demand='High', work_life_balance='Good', job_security='High',
        icon='📊', field='Technology'),
    'leadership': CareerMetadata(
        title='Product Manager',
        description='Lead cross-functional teams to plan, build and launch products.',
        salary_band='₹10-30 LPA', demand='High', work_life_balance='Medium', job_security='Medium',
        icon='🚀', field='Business'),
    'communication': CareerMetadata(
        title='Teacher or Counselor',
        description='Guide and educate students in schools, colleges and training centres.',
        salary_band='₹3-8 LPA', demand='Medium', work_life_balance='Excellent', job_security='High',
        icon='🎓', field='Education'),
    'regionalImpact': CareerMetadata(
        title='Healthcare Professional',
        description='Provide medical care and support to patients in various healthcare settings.',
        salary_band='₹8-25 LPA', demand='High', work_life_balance='Challenging', job_security='High',
        icon='🏥', field='Healthcare'),
}

_PROFILE_QUESTIONS = [
    (1, "How do you prefer to learn?", "learning_environment", [
        ("Individual, self-paced study", 'technical', 20),
        ("Group discussions", 'communication', 20),
        ("Interactive workshops", 'leadership', 15)]),
    (2, "What energizes you the most?", "energy", [
        ("Solving difficult problems", 'technical', 25),
        ("Creating something new", 'creative', 25),
        ("Analyzing information", 'analytical', 25),
        ("Leading people", 'leadership', 25)]),
    (3, "How do you prefer to communicate?", "communication", [
        ("Written messages and documents", 'technical', 15),
        ("Visual presentations", 'creative', 20),
        ("Face-to-face conversations", 'communication', 25)]),
    (4, "What motivates you at work?", "motivation", [
        ("Making an impact on society", 'regionalImpact', 25),
        ("Financial rewards", 'analytical', 15),
        ("Continuous learning", 'technical', 15)]),
    (5, "Which problems do you like to solve?", "problem_type", [
        ("Technical problems", 'technical', 25),
        ("Creative problems", 'creative', 25),
        ("People problems", 'communication', 20),
        ("Strategic problems", 'leadership', 20)]),
    (6, "Which work environment suits you best?", "environment", [
        ("Fast-moving startup", 'leadership', 15),
        ("Structured corporate office", 'analytical', 15),
        ("Remote and independent", 'technical', 10),
        ("Collaborative team space", 'communication', 20)]),
    (7, "Which skill would you like to develop next?", "skills", [
        ("Programming", 'technical', 25),
        ("Design", 'creative', 25),
        ("Leadership", 'leadership', 25),
        ("Communication", 'communication', 25)]),
    (8, "What kind of impact do you want to have?", "impact", [
        ("Global reach", 'leadership', 20),
        ("Local community development", 'regionalImpact', 25),
        ("Innovation that changes industries", 'technical', 20)]),
    (9, "How do you approach a new challenge?", "approach", [
        ("Research it thoroughly first", 'analytical', 20),
        ("Jump in and learn by doing", 'creative', 15),
        ("Collaborate with others", 'communication', 20)]),
    (10, "What interests you most about technology?", "technology", [
        ("Building new things", 'technical', 25),
        ("Understanding how it works", 'analytical', 20),
        ("Using it to solve real problems", 'technical', 15),
        ("Teaching others to use it", 'communication', 20)]),
    (11, "Which career aspect matters most to you?", "career_aspect", [
        ("Work-life balance", 'creative', 15),
        ("Earning potential", 'analytical', 15),
        ("Job security", 'technical', 10),
        ("Room for creativity", 'creative', 20)]),
    (12, "How do you like to keep learning?", "learning_preference", [
        ("Hands-on projects", 'technical', 20),
        ("Structured courses", 'analytical', 15),
        ("Mentorship", 'communication', 15)]),
]

CAREER_PROFILE_QUIZ = QuizDefinition(
    quiz_type=CAREER_PROFILE,
    title='AI Career Quiz',
    categories=PROFILE_CATEGORIES,
    questions=[_weighted_question(qid, text, options, category=tag)
               for qid, text, tag, options in _PROFILE_QUESTIONS],
    normalization=NormalizationPolicy.THEORETICAL_MAX,
    metadata=PROFILE_METADATA,
)


QUIZZES = {
    quiz.quiz_type: quiz
    for quiz in (SUBJECT_APTITUDE_QUIZ, DEGREE_BRANCH_QUIZ, CAREER_PROFILE_QUIZ)
}


def get_quiz(quiz_type: str) -> QuizDefinition:
    quiz = QUIZZES.get(quiz_type)
    if quiz is None:
        raise NotFoundError(f"Unknown quiz type '{quiz_type}'")
    return quiz
